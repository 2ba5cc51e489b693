"""
Chat helper schemas. History turns accept either content or message for the text.
"""
from pydantic import Field

from quizora.schemas.common import CamelModel


class ChatTurn(CamelModel):
    role: str = "user"
    content: str | None = None
    message: str | None = None

    @property
    def text(self) -> str:
        return self.content or self.message or ""


class ChatRequest(CamelModel):
    message: str | None = None
    history: list[ChatTurn] = Field(default_factory=list)


class ChatResponse(CamelModel):
    success: bool = True
    reply: str
