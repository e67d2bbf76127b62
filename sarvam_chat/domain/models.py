from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sarvam_chat.domain.errors import FailureKind

DEFAULT_LANGUAGE = 'en'


class Role(str, Enum):
    SYSTEM = 'system'
    USER = 'user'
    ASSISTANT = 'assistant'


ALLOWED_ROLES = frozenset(r.value for r in Role)


class Message(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: Role
    content: str = Field(min_length=1)
    language: str = DEFAULT_LANGUAGE


class ChatReply(BaseModel):
    model_config = ConfigDict(frozen=True)

    reply: str
    language: str


class ChatFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    error: str
    status_code: int
    fallback: Optional[str] = None


ChatOutcome = Union[ChatReply, ChatFailure]
