import time
from typing import Any

from fastapi import Response
from fastapi.responses import JSONResponse

from .config import Settings
from .llm_client import CompletionClient, UpstreamError
from .log import event, get_logger
from .prompt import build_prompt

logger = get_logger()

NO_API_KEY = "OpenAI API key not configured, please follow instructions in README.md"
INVALID_QUESTION = "Please enter a valid question."
GENERIC_ERROR = "An error occurred during your request."


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"message": message}})


def upstream_response(err: UpstreamError) -> Response:
    # тело апстрима отдаём байт в байт
    return Response(content=err.raw, status_code=err.status_code, media_type=err.content_type)


async def handle(question: Any, settings: Settings, client: CompletionClient) -> Response:
    """Один вопрос -> один вызов модели -> JSON.

    Ключ проверяется раньше ввода: без него любой запрос получает 500.
    """
    if not settings.openai_configured():
        logger.error(event(event="config_error", missing="OPENAI_API_KEY"))
        return error_response(500, NO_API_KEY)

    if not isinstance(question, str) or not question.strip():
        logger.info(event(event="validation_error"))
        return error_response(400, INVALID_QUESTION)

    prompt = build_prompt(question)
    t0 = time.perf_counter()
    try:
        text = await client.generate(prompt, settings.TEMPERATURE)
    except UpstreamError as e:
        logger.error(event(event="upstream_error", status=e.status_code, body=e.body))
        return upstream_response(e)
    except Exception as e:
        logger.exception(event(event="upstream_failure", error=repr(e)))
        return error_response(500, GENERIC_ERROR)

    logger.info(event(
        event="generate",
        status=200,
        latency_ms=round((time.perf_counter() - t0) * 1000),
        prompt_chars=len(prompt),
        temperature=settings.TEMPERATURE,
    ))
    return JSONResponse(status_code=200, content={"result": text})
