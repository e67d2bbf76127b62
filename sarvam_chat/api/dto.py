from typing import Optional

from pydantic import BaseModel


class ChatOut(BaseModel):
    reply: str
    language: str


class ErrorOut(BaseModel):
    error: str
    fallback: Optional[str] = None


class LanguageOut(BaseModel):
    code: str
    name: str
    native_name: str
