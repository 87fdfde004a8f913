from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, Response
from fastapi.responses import PlainTextResponse

from app.application.dto.webhook_event import WebhookEventDTO
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.core.config import settings
from app.infrastructure.whatsapp.webhook_verify import verify_get_request, verify_post_signature
from app.wiring.dependencies import get_handle_incoming_message_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/webhooks/whatsapp")
def verify_webhook(
    hub_mode: str | None = Query(None, alias="hub.mode"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token"),
    hub_challenge: str | None = Query(None, alias="hub.challenge"),
):
    challenge = verify_get_request(
        {"hub.mode": hub_mode, "hub.verify_token": hub_verify_token, "hub.challenge": hub_challenge},
        settings.WHATSAPP_VERIFY_TOKEN,
    )
    if challenge is None:
        logger.warning("Webhook verification failed", extra={"channel": "whatsapp", "reason": hub_mode})
        raise HTTPException(status_code=403, detail="Verification failed")
    return PlainTextResponse(challenge)


@router.post("/webhooks/whatsapp")
async def whatsapp_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    use_case: HandleIncomingMessageUseCase = Depends(get_handle_incoming_message_use_case),
) -> Response:
    body = await request.body()
    signature = request.headers.get("X-Hub-Signature-256")
    if not verify_post_signature(body, signature, settings.WHATSAPP_APP_SECRET, allow_unsigned=settings.is_dev):
        logger.warning("Invalid webhook signature", extra={"channel": "whatsapp"})
        return Response(status_code=403)

    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        event = WebhookEventDTO.model_validate(payload)
    except Exception as e:
        logger.warning("Failed to parse webhook body", extra={"channel": "whatsapp", "error": str(e)})
        return Response(status_code=400)

    try:
        messages = event.extract_messages()
        logger.info("Webhook received", extra={"channel": "whatsapp", "reason": f"messages={len(messages)}"})

        for message in messages:
            background_tasks.add_task(use_case.handle_and_reply, message)

        return Response(status_code=200)
    except Exception as e:
        logger.exception("Error processing webhook event", extra={"channel": "whatsapp", "error": str(e)})
        return Response(status_code=500)
