import asyncio
from typing import Protocol

import httpx


class UpstreamError(Exception):
    """Ошибка, на которую внешний сервис ответил сам: статус + сырое тело."""

    def __init__(self, status_code: int, raw: bytes, content_type: str = "application/json"):
        super().__init__(f"upstream returned {status_code}")
        self.status_code = status_code
        self.raw = raw
        self.content_type = content_type

    @property
    def body(self) -> str:
        # только для логов, наружу уходит raw
        return self.raw.decode("utf-8", errors="replace")

    @classmethod
    def from_response(cls, r: httpx.Response) -> "UpstreamError":
        return cls(r.status_code, r.content, r.headers.get("content-type", "application/json"))


class CompletionClient(Protocol):
    async def generate(self, prompt: str, temperature: float) -> str: ...


class OpenAICompletionClient:
    def __init__(
        self,
        api_key: str | None,
        model: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        max_tokens: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.url = f"{base_url.rstrip('/')}/completions"
        self.timeout = timeout
        self.max_tokens = max_tokens
        self._transport = transport

    def _payload(self, prompt: str, temperature: float) -> dict:
        payload = {"model": self.model, "prompt": prompt, "temperature": temperature}
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        return payload

    async def generate(self, prompt: str, temperature: float) -> str:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        # один запрос, без ретраев; сетевые ошибки и таймауты летят наверх как есть.
        # httpx ограничивает каждую фазу отдельно, wait_for держит общий дедлайн
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await asyncio.wait_for(
                client.post(self.url, json=self._payload(prompt, temperature), headers=headers),
                timeout=self.timeout,
            )
        if r.is_error:
            raise UpstreamError.from_response(r)

        choices = r.json().get("choices") or []
        if not choices:
            raise ValueError("completion response has no choices")
        return choices[0].get("text", "")
