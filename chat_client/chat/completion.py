from typing import Any, Optional, Sequence

import httpx

from chat_client.chat.errors import FormatError, NetworkError
from chat_client.chat.state import Message

INVALID_RESPONSE = "Invalid response format"


class CompletionClient:
    """One non-streaming POST to an OpenAI-compatible chat-completions endpoint."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        url: str,
        api_key: str,
        max_tokens: int = 4000,
        temperature: float = 0.7,
        timeout: Optional[float] = None,
    ):
        self.http = http
        self.url = url
        self.api_key = api_key
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    def build_payload(self, model: str, messages: Sequence[Message]) -> dict[str, Any]:
        return {
            "model": model,
            "messages": [m.model_dump(mode="json") for m in messages],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "stream": False,
        }

    async def complete(self, model: str, messages: Sequence[Message]) -> str:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        try:
            resp = await self.http.post(
                self.url,
                json=self.build_payload(model, messages),
                headers=headers,
                timeout=httpx.Timeout(self.timeout),
            )
        except httpx.TimeoutException as e:
            raise NetworkError(f"API request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"API request failed: {e}") from e

        if resp.status_code < 200 or resp.status_code >= 300:
            raise NetworkError(f"API request failed: {resp.status_code} - {resp.text}", resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise FormatError(INVALID_RESPONSE, resp.status_code) from e

        return _first_choice_content(data, resp.status_code)


def _first_choice_content(data: Any, status_code: int) -> str:
    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices:
        raise FormatError(INVALID_RESPONSE, status_code)

    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise FormatError(INVALID_RESPONSE, status_code)
    return content
