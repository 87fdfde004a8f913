from pydantic import BaseModel


class ChatRequestSchema(BaseModel):
    user_id: str | None = None
    message: str | None = None


class ChatResponseSchema(BaseModel):
    response: str | None = None
    session_id: str | None = None
    error: str | None = None
