from __future__ import annotations

import json
import logging
import time
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.api.v1.schemas import ChatRequestSchema, ChatResponseSchema
from app.application.exceptions import InvalidMessageError
from app.application.use_cases.handle_incoming_message import RATE_LIMITED, HandleIncomingMessageUseCase
from app.application.utils.identity import resolve_session_key
from app.application.utils.input_validation import sanitize_for_log, validate_message, validate_user_id
from app.core.config import settings
from app.domain.entities.message import Message
from app.wiring.dependencies import get_handle_incoming_message_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


def _json(status_code: int, **fields: str | None) -> JSONResponse:
    body = ChatResponseSchema(**fields).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@router.post("/chatbot")
async def chatbot(
    request: Request,
    background_tasks: BackgroundTasks,
    use_case: HandleIncomingMessageUseCase = Depends(get_handle_incoming_message_use_case),
) -> JSONResponse:
    body = await request.body()
    if len(body) > settings.BODY_LIMIT_BYTES:
        return _json(413, error="Requisição muito grande")

    try:
        payload = ChatRequestSchema.model_validate(json.loads(body.decode("utf-8")))
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Invalid chat payload", extra={"channel": "web", "error": str(e)})
        return _json(400, error="JSON inválido")

    user_id_error: str | None = None
    try:
        explicit_id = validate_user_id(payload.user_id, settings.MAX_USER_ID_LENGTH)
    except InvalidMessageError as e:
        explicit_id = None
        user_id_error = str(e)

    identity = resolve_session_key(
        explicit_id,
        request.headers.get(settings.SESSION_HEADER_NAME),
        request.cookies.get(settings.SESSION_COOKIE_NAME),
    )
    session_key = identity.session_key

    status_code, content, intents = await _run_turn(use_case, request, payload, session_key, user_id_error)
    response = JSONResponse(status_code=status_code, content=content)
    if identity.generated:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=session_key,
            max_age=settings.SESSION_COOKIE_MAX_AGE_SECONDS,
            path="/",
            httponly=True,
            secure=settings.SECURE_COOKIES,
            samesite="lax",
        )
    if intents:
        background_tasks.add_task(use_case.dispatch, intents)
    return response


async def _run_turn(
    use_case: HandleIncomingMessageUseCase,
    request: Request,
    payload: ChatRequestSchema,
    session_key: str,
    user_id_error: str | None,
) -> tuple[int, dict[str, str], tuple]:
    if user_id_error is not None:
        return 400, {"error": user_id_error, "session_id": session_key}, ()

    try:
        text = validate_message(payload.message, settings.MAX_MESSAGE_LENGTH)
    except InvalidMessageError as e:
        logger.info(
            "Rejected chat message",
            extra={"session_key": session_key, "channel": "web", "reason": str(e)},
        )
        return 400, {"error": str(e), "session_id": session_key}, ()

    message = Message(
        id=uuid.uuid4().hex,
        session_key=session_key,
        text=text,
        timestamp=int(time.time()),
        platform="web",
        client_key=request.client.host if request.client else "unknown",
    )

    try:
        result = await run_in_threadpool(use_case.handle, message)
    except Exception as e:
        logger.exception(
            "Error processing chat message",
            extra={"session_key": session_key, "channel": "web", "error": sanitize_for_log(str(e))},
        )
        return 500, {"error": "Erro interno do servidor", "session_id": session_key}, ()

    if result.error == RATE_LIMITED:
        return 429, {"error": "Too Many Requests", "session_id": session_key}, ()

    return 200, {"response": result.reply, "session_id": session_key}, result.intents
