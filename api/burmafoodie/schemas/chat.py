import time
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from burmafoodie.schemas.recipe import ModelResponse

_last_ns = 0


def new_message_id(prefix: str) -> str:
    """Creation-time id, strictly increasing even within one clock tick."""
    global _last_ns
    now = time.time_ns()
    if now <= _last_ns:
        now = _last_ns + 1
    _last_ns = now
    return f"{prefix}-{now}"


class ChatMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    role: Literal["user", "model"]
    text: str | None = None
    image: str | None = Field(default=None, description="Data URI, never persisted")
    content: Optional[ModelResponse] = None
    is_loading: bool = Field(default=False, alias="isLoading")

    @classmethod
    def user(cls, text: str, image: str | None = None) -> "ChatMessage":
        return cls(id=new_message_id("user"), role="user", text=text, image=image)

    @classmethod
    def placeholder(cls) -> "ChatMessage":
        return cls(id=new_message_id("model-loading"), role="model", is_loading=True)

    def to_storage(self) -> dict:
        return self.model_dump(
            by_alias=True,
            exclude={"image", "is_loading"},
            exclude_none=True,
        )
