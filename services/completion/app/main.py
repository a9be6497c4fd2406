import asyncio
from typing import Awaitable

from fastapi import FastAPI, Request, Response
from pydantic import BaseModel, ValidationError

from .config import Settings
from .handler import handle
from .llm_client import CompletionClient, OpenAICompletionClient
from .log import event, get_logger

logger = get_logger()

# Клиент закрыл соединение раньше ответа (nginx-style)
CLIENT_CLOSED_REQUEST = 499


class GenerateRequest(BaseModel):
    question: str | None = None


class ClientDisconnected(Exception):
    pass


async def _read_question(request: Request) -> str | None:
    # битое тело, не-объект или не-строка = пустой вопрос, дальше отсечёт handle()
    try:
        return GenerateRequest.model_validate_json(await request.body()).question
    except (ValidationError, RecursionError):
        return None


async def run_cancellable(request: Request, coro: Awaitable, poll_sec: float):
    task = asyncio.ensure_future(coro)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_sec)
            if done:
                return task.result()
            if await request.is_disconnected():
                raise ClientDisconnected()
    finally:
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass


def build_client(settings: Settings) -> OpenAICompletionClient:
    return OpenAICompletionClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.MODEL,
        base_url=settings.OPENAI_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SEC,
        max_tokens=settings.MAX_TOKENS,
    )


def create_app(settings: Settings | None = None, client: CompletionClient | None = None) -> FastAPI:
    # настройки читаются один раз при старте и дальше передаются явно
    settings = settings or Settings()
    client = client or build_client(settings)
    get_logger(level=settings.LOG_LEVEL)

    app = FastAPI(title="completion")
    app.state.settings = settings
    app.state.client = client

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/readyz")
    def readyz():
        ok = settings.openai_configured()
        return {
            "status": "ready" if ok else "degraded",
            "openai_configured": ok,
            "model": settings.MODEL,
        }

    @app.post("/api/generate")
    async def generate(request: Request):
        question = await _read_question(request)
        coro = handle(question, settings, client)
        if not settings.CANCEL_ON_DISCONNECT:
            return await coro
        try:
            return await run_cancellable(request, coro, settings.DISCONNECT_POLL_SEC)
        except ClientDisconnected:
            logger.info(event(event="client_disconnected", path=request.url.path))
            return Response(status_code=CLIENT_CLOSED_REQUEST)

    return app


app = create_app()
