"""Service exports."""

from .inference_client import OllamaClient, complete
from .result_parser import parse_completion

__all__ = ["OllamaClient", "complete", "parse_completion"]
