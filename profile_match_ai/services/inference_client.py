"""Async HTTP client for an Ollama-compatible /api/generate endpoint."""

from typing import Any, Optional

import httpx

from profile_match_ai.config import GENERATE_PATH
from profile_match_ai.errors import MalformedResponseError, ServiceUnavailableError
from profile_match_ai.schemas.analysis import InferenceOptions
from profile_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def generate_url(endpoint: str) -> str:
    """Join the configured base URL with the generate path."""
    return (endpoint or "").strip().rstrip("/") + GENERATE_PATH


def build_payload(model: str, prompt: str, options: InferenceOptions) -> dict[str, Any]:
    """JSON body for a single, non-streamed completion."""
    return {
        "model": model,
        "prompt": prompt,
        "stream": False,
        "options": {
            "temperature": options.temperature,
            "top_p": options.top_p,
        },
    }


class OllamaClient:
    """
    Sends one prompt, returns the raw completion text.
    Single attempt, no client-side timeout; callers re-run the pipeline to retry.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    async def complete(
        self,
        endpoint: str,
        model: str,
        prompt: str,
        options: Optional[InferenceOptions] = None,
    ) -> str:
        url = generate_url(endpoint)
        payload = build_payload(model, prompt, options or InferenceOptions())
        try:
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            reason = e.response.reason_phrase or "error"
            logger.error("Inference API error %s %s for %s", status, reason, url)
            raise ServiceUnavailableError(
                f"Ollama API error: {status} {reason}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            logger.error("Inference request to %s failed: %s", url, e)
            raise ServiceUnavailableError(
                f"Failed to connect to Ollama at {endpoint}: {str(e) or type(e).__name__}"
            ) from e
        except httpx.InvalidURL as e:
            logger.error("Invalid inference endpoint %r: %s", endpoint, e)
            raise ServiceUnavailableError(f"Invalid Ollama URL: {endpoint!r}") from e

        return _completion_text(response)


def _completion_text(response: httpx.Response) -> str:
    """Pull the `response` field out of the body without interpreting it."""
    try:
        data = response.json()
    except ValueError as e:
        logger.warning("Inference response body is not JSON: %s", e)
        raise MalformedResponseError() from e
    completion = data.get("response") if isinstance(data, dict) else None
    if not isinstance(completion, str):
        logger.warning("Inference response has no string 'response' field")
        raise MalformedResponseError()
    logger.info("Received completion (%s chars)", len(completion))
    return completion


async def complete(
    endpoint: str,
    model: str,
    prompt: str,
    options: Optional[InferenceOptions] = None,
) -> str:
    """Module-level shortcut using a default client."""
    return await OllamaClient().complete(endpoint, model, prompt, options)
