import os
from dotenv import load_dotenv

load_dotenv()

# API Keys and Config - loaded from .env
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

# Models
TEXT_MODEL = os.getenv("TEXT_MODEL", "gpt-5.2")
IMAGE_MODEL_STANDARD = os.getenv("IMAGE_MODEL_STANDARD", "gemini-2.5-flash-image")
IMAGE_MODEL_PRO = os.getenv("IMAGE_MODEL_PRO", "gemini-3-pro-image-preview")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
