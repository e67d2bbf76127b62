from fastapi import Depends, Request

from sarvam_chat.domain.ports.llm import LLMPort
from sarvam_chat.services.chat_service import ChatService
from sarvam_chat.settings import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_llm_port(request: Request) -> LLMPort:
    return request.app.state.llm


def get_service(
    settings: Settings = Depends(get_app_settings),
    llm: LLMPort = Depends(get_llm_port),
) -> ChatService:
    return ChatService.from_settings(llm, settings)
