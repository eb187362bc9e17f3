"""Campaign ideation graph: strategy nodes expanded into ad creatives."""

__version__ = "0.1.0"
