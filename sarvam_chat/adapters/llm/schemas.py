"""Wire shapes for the Sarvam chat API.

The upstream service does not commit to a single response layout, so each
layout it has been seen to return is modelled as its own shape. Decoding
tries the shapes in priority order and the first one that validates with
non-blank reply text wins.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple, Type

from pydantic import (BaseModel, ConfigDict, Field, ValidationError,
                      field_validator, model_validator)

from sarvam_chat.domain.models import Message
from sarvam_chat.utils.text import clean_text


class UpstreamPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    messages: List[Message]
    language: Optional[str] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None

    def to_json(self) -> dict:
        # unset generation overrides are left out entirely
        return self.model_dump(mode='json', exclude_none=True)


# ---------- response shapes ----------


class _ReplyShape(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    @property
    def reply(self) -> Optional[str]:
        raise NotImplementedError

    @model_validator(mode='after')
    def require_reply(self):
        if self.reply is None:
            raise ValueError(f'{type(self).__name__}: no reply text')
        return self


class _ChoiceMessage(BaseModel):
    model_config = ConfigDict(extra='ignore')

    content: Any = None


class _Choice(BaseModel):
    model_config = ConfigDict(extra='ignore')

    message: Optional[_ChoiceMessage] = None
    text: Any = None

    @field_validator('message', mode='before')
    def drop_non_object(cls, v):
        return v if isinstance(v, dict) else None


class ChoicesReply(_ReplyShape):
    """`{"choices": [{"message": {"content": ...}} | {"text": ...}]}`"""

    choices: List[_Choice] = Field(min_length=1)

    @property
    def reply(self) -> Optional[str]:
        first = self.choices[0]
        nested = clean_text(first.message.content) if first.message else None
        return nested or clean_text(first.text)


class OutputReply(_ReplyShape):
    output: Any

    @property
    def reply(self) -> Optional[str]:
        return clean_text(self.output)


class ResponseReply(_ReplyShape):
    response: Any

    @property
    def reply(self) -> Optional[str]:
        return clean_text(self.response)


class _DataOutput(BaseModel):
    model_config = ConfigDict(extra='ignore')

    output: Any = None


class DataOutputReply(_ReplyShape):
    data: _DataOutput

    @property
    def reply(self) -> Optional[str]:
        return clean_text(self.data.output)


class MessageReply(_ReplyShape):
    message: Any

    @property
    def reply(self) -> Optional[str]:
        return clean_text(self.message)


REPLY_SHAPES: Tuple[Type[_ReplyShape], ...] = (
    ChoicesReply,
    OutputReply,
    ResponseReply,
    DataOutputReply,
    MessageReply,
)


def extract_reply(body: Any) -> Optional[str]:
    """Return the trimmed reply text from an upstream body, or None."""
    for shape in REPLY_SHAPES:
        try:
            return shape.model_validate(body).reply
        except ValidationError:
            continue
    return None


# ---------- error bodies ----------


class _ErrorDetail(BaseModel):
    model_config = ConfigDict(extra='ignore')

    message: Any = None


class UpstreamErrorBody(BaseModel):
    """`{"error": "..."}`, `{"error": {"message": "..."}}` or `{"message": "..."}`"""

    model_config = ConfigDict(extra='ignore')

    error: Any = None
    message: Any = None

    @property
    def detail(self) -> Optional[str]:
        if isinstance(self.error, dict):
            nested = clean_text(_ErrorDetail.model_validate(self.error).message)
        else:
            nested = clean_text(self.error)
        return nested or clean_text(self.message)


def extract_error_detail(body: Any) -> Optional[str]:
    try:
        return UpstreamErrorBody.model_validate(body).detail
    except ValidationError:
        return None
