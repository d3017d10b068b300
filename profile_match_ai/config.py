"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# Inference endpoint (Ollama-compatible /api/generate)
OLLAMA_URL: str = os.getenv("OLLAMA_URL", "http://localhost:11434")
MODEL_NAME: str = os.getenv("MODEL_NAME", "llama3.2")
GENERATE_PATH: str = "/api/generate"

# Sampling defaults
TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
TOP_P: float = float(os.getenv("TOP_P", "0.9"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Upload formats. Keys are the format tags used by the text extractor.
SUPPORTED_EXTENSIONS: dict = {
    "txt": "text",
    "pdf": "pdf",
    "doc": "word",
    "docx": "word",
}

MIME_TYPES: dict = {
    "text/plain": "text",
    "application/pdf": "pdf",
    "application/msword": "word",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "word",
}

# Uploaders send these when they do not know the type; fall back to the extension.
GENERIC_MIME_TYPES: tuple = (
    "application/octet-stream",
    "binary/octet-stream",
)
