from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "qibot-chatbot"

    STORE_PROVIDER: str | None = None  # "redis" | "memory"; derived from ENV/REDIS_URL when unset
    REDIS_URL: str | None = None
    REDIS_SOCKET_TIMEOUT_SECONDS: float = 3.0
    REDIS_CONNECT_TIMEOUT_SECONDS: float = 5.0
    SESSION_TTL_SECONDS: int = 3600
    INACTIVITY_TIMEOUT_SECONDS: int = 600

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_RPM: int = 60
    RATE_LIMIT_BURST: int = 10
    RATE_LIMIT_IDLE_SECONDS: int = 3600

    MAX_MESSAGE_LENGTH: int = 1000
    MAX_USER_ID_LENGTH: int = 100
    BODY_LIMIT_BYTES: int = 4096

    SESSION_COOKIE_NAME: str = "qid"
    SESSION_HEADER_NAME: str = "X-Session-ID"
    SESSION_COOKIE_MAX_AGE_SECONDS: int = 86400
    SECURE_COOKIES: bool = False
    CORS_ALLOW_ORIGINS: str = "*"

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_REPLY: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_REPLY: float = 0.3
    OPENAI_TIMEOUT_SECONDS: float = 15.0
    OPENAI_MAX_TOKENS: int = 600

    GOOGLE_SHEETS_ID: str | None = None
    GOOGLE_APPLICATION_CREDENTIALS: str = "credentials.json"
    SHEETS_TIMEOUT_SECONDS: float = 10.0

    WHATSAPP_VERIFY_TOKEN: str = ""
    WHATSAPP_APP_SECRET: str | None = None
    WHATSAPP_PHONE_ID: str | None = None
    WHATSAPP_TOKEN: str | None = None
    WHATSAPP_GRAPH_API_VERSION: str = "v19.0"
    AUTO_REPLY_ENABLED: bool = False

    @property
    def is_dev(self) -> bool:
        return self.ENV.lower() in {"dev", "local"}

    @property
    def store_provider(self) -> str:
        if self.STORE_PROVIDER:
            return self.STORE_PROVIDER.lower()
        if self.REDIS_URL or not self.is_dev:
            return "redis"
        return "memory"

    @property
    def cors_origins(self) -> list[str]:
        origins = [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]
        return origins or ["*"]


settings = Settings()
