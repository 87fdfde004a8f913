from functools import lru_cache
import logging

from app.application.ports.llm import LLMPort
from app.application.ports.message_platform import MessagePlatformPort
from app.application.ports.persistence_sink import PersistenceSinkPort
from app.application.ports.session_store import SessionStorePort
from app.application.use_cases.dialog_machine import DialogStateMachine
from app.application.use_cases.dispatch_intents import IntentDispatcher
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.application.use_cases.remediation import RemediationEngine
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.utils.rate_limiter import TokenBucketRateLimiter
from app.core.config import settings
from app.infrastructure.llm.mock_llm import UnavailableLLM
from app.infrastructure.llm.openai_llm import OpenAILLM
from app.infrastructure.sheets.google_sheets_sink import GoogleSheetsSink
from app.infrastructure.sheets.logging_sink import LoggingSink
from app.infrastructure.store.memory_store import MemorySessionStore
from app.infrastructure.store.redis_store import RedisSessionStore
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from app.infrastructure.whatsapp.whatsapp_client import WhatsAppClient
from app.infrastructure.whatsapp.whatsapp_platform import WhatsAppPlatform


logger = logging.getLogger(__name__)


@lru_cache
def get_llm() -> LLMPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAILLM(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL_REPLY,
            temperature=settings.OPENAI_TEMPERATURE_REPLY,
            max_tokens=settings.OPENAI_MAX_TOKENS,
            timeout_seconds=settings.OPENAI_TIMEOUT_SECONDS,
        )
    logger.warning("OPENAI_API_KEY missing; diagnosis replies will use fallbacks")
    return UnavailableLLM()


@lru_cache
def get_session_store() -> SessionStorePort:
    provider = settings.store_provider
    if provider == "redis":
        store = RedisSessionStore.from_url(
            settings.REDIS_URL or "redis://localhost:6379/0",
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
            connect_timeout=settings.REDIS_CONNECT_TIMEOUT_SECONDS,
        )
        if not store.ping():
            logger.warning("Redis not reachable at startup; sessions degrade to fresh", extra={"reason": "ping"})
        return store
    if provider != "memory":
        raise ValueError(f"Unknown STORE_PROVIDER: {provider}")
    logger.info("Using in-memory session store")
    return MemorySessionStore()


@lru_cache
def get_persistence_sink() -> PersistenceSinkPort:
    if not settings.GOOGLE_SHEETS_ID:
        logger.info("GOOGLE_SHEETS_ID missing; using LoggingSink")
        return LoggingSink()

    sink = GoogleSheetsSink.from_service_account_file(
        spreadsheet_id=settings.GOOGLE_SHEETS_ID,
        key_path=settings.GOOGLE_APPLICATION_CREDENTIALS,
        timeout_seconds=settings.SHEETS_TIMEOUT_SECONDS,
    )
    try:
        sink.ensure_headers()
    except Exception as e:
        logger.warning("Could not write sheet headers", extra={"error": str(e)})
    return sink


def get_whatsapp_platform() -> MessagePlatformPort:
    if not settings.WHATSAPP_TOKEN or not settings.WHATSAPP_PHONE_ID:
        if settings.is_dev:
            logger.info("Using MockWhatsAppPlatform (token missing, ENV=dev/local)")
            return MockWhatsAppPlatform()
        raise ValueError("WHATSAPP_TOKEN and WHATSAPP_PHONE_ID are required to send WhatsApp replies.")

    client = WhatsAppClient(
        access_token=settings.WHATSAPP_TOKEN,
        phone_number_id=settings.WHATSAPP_PHONE_ID,
        api_version=settings.WHATSAPP_GRAPH_API_VERSION,
    )
    return WhatsAppPlatform(client=client)


def get_rate_limiter() -> TokenBucketRateLimiter | None:
    if not settings.RATE_LIMIT_ENABLED:
        return None
    return TokenBucketRateLimiter(
        requests_per_minute=settings.RATE_LIMIT_RPM,
        burst=settings.RATE_LIMIT_BURST,
        idle_seconds=float(settings.RATE_LIMIT_IDLE_SECONDS),
    )


@lru_cache
def get_handle_incoming_message_use_case() -> HandleIncomingMessageUseCase:
    # cached: the rate limiter, session locks and dedupe cache live on this instance
    return HandleIncomingMessageUseCase(
        store=get_session_store(),
        machine=DialogStateMachine(remediation=RemediationEngine(llm=get_llm())),
        dispatcher=IntentDispatcher(sink=get_persistence_sink()),
        send_reply=SendReplyUseCase(
            platform=get_whatsapp_platform(),
            auto_reply_enabled=settings.AUTO_REPLY_ENABLED,
        ),
        rate_limiter=get_rate_limiter(),
        session_ttl_seconds=settings.SESSION_TTL_SECONDS,
        inactivity_timeout_seconds=settings.INACTIVITY_TIMEOUT_SECONDS,
    )
