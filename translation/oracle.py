"""Chat-completion client used as the translation oracle."""
import logging
import httpx
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import Config
from errors import OracleError


logger = logging.getLogger(__name__)


class ChatCompletionOracle:
    """
    Oracle backed by an OpenAI-compatible ``/chat/completions`` endpoint (Groq by default).

    No retry or backoff: a failed call raises OracleError and ends the job.
    """

    def __init__(self, config: Config, client: httpx.AsyncClient = None):
        self.config = config
        self.base_url = config.oracle_url.rstrip("/")
        self.model = config.oracle_model
        self.headers = {}
        if config.oracle_api_key:
            self.headers["Authorization"] = f"Bearer {config.oracle_api_key}"
        self.client = client if client is not None else httpx.AsyncClient(timeout=config.oracle_timeout)

    async def complete(self, system_instruction: str, user_content: str) -> str:
        """Send one system + user exchange and return the model's text ("" if absent)."""
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_content},
            ],
            "temperature": self.config.oracle_temperature,
        }

        try:
            response = await self.client.post(f"{self.base_url}/chat/completions", json=payload, headers=self.headers)
        except httpx.HTTPError as e:
            raise OracleError(f"Oracle request failed: {e}") from e

        if response.is_error:
            raise OracleError(
                f"Oracle returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise OracleError("Oracle returned a non-JSON body", response.status_code, response.text) from e

        if not isinstance(data, dict):
            raise OracleError("Oracle returned an unexpected body", response.status_code, response.text)

        choices = data.get("choices") or [{}]
        choice = choices[0] if isinstance(choices, list) else None
        message = choice.get("message") if isinstance(choice, dict) else None
        if not isinstance(choice, dict) or not isinstance(message, (dict, type(None))):
            raise OracleError("Oracle returned an unexpected body", response.status_code, response.text)

        content = (message or {}).get("content") or ""
        if not isinstance(content, str):
            raise OracleError("Oracle returned an unexpected body", response.status_code, response.text)
        logger.debug("Oracle answered with %d characters", len(content))
        return content

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
