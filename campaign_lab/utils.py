import base64
import json
import re
import uuid
from typing import Any


def new_id() -> str:
    """Return a fresh globally unique node/edge id."""
    return str(uuid.uuid4())


def extract_json(text: str) -> Any:
    """Parse JSON from model output.

    Tolerates markdown code fences and leading/trailing prose around the
    first JSON object or array.

    Raises:
        ValueError: If no JSON value can be parsed.
    """
    cleaned = re.sub(r"```(?:json)?", "", text).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    # Fall back to the outermost {...} or [...] span, whichever opens first
    spans = []
    for open_char, close_char in (("[", "]"), ("{", "}")):
        start = cleaned.find(open_char)
        end = cleaned.rfind(close_char) + 1
        if start != -1 and end > start:
            spans.append((start, end))

    for start, end in sorted(spans):
        try:
            return json.loads(cleaned[start:end])
        except json.JSONDecodeError:
            continue

    raise ValueError(f"No JSON found in model output: {text[:200]!r}")


def to_data_url(image_bytes: bytes, mime_type: str = "image/png") -> str:
    """Encode image bytes as a data URL for the canvas."""
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
