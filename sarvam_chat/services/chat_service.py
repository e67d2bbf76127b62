import logging
from typing import Any, List, Optional

from sarvam_chat.domain.errors import ApiError, FailureKind, InvalidMessage
from sarvam_chat.domain.history import sanitize_history
from sarvam_chat.domain.languages import get_language_name, is_supported
from sarvam_chat.domain.models import (DEFAULT_LANGUAGE, ChatFailure,
                                       ChatOutcome, ChatReply, Message, Role)
from sarvam_chat.domain.ports.llm import LLMPort
from sarvam_chat.settings import Settings
from sarvam_chat.utils.text import clean_text

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = 'Unexpected error while processing the request.'


def resolve_language(value: Any) -> str:
    return clean_text(value) or DEFAULT_LANGUAGE


class ChatService(object):
    def __init__(
        self,
        llm: LLMPort,
        *,
        system_prompt: str,
        fallback_reply: str,
        max_context_messages: int = 12,
    ):
        self.llm = llm
        self.system_prompt = system_prompt
        self.fallback_reply = fallback_reply
        self.max_context_messages = max_context_messages

    @classmethod
    def from_settings(cls, llm: LLMPort, settings: Settings) -> 'ChatService':
        return cls(
            llm,
            system_prompt=settings.SARVAM_SYSTEM_PROMPT,
            fallback_reply=settings.CHATBOT_FALLBACK_RESPONSE,
            max_context_messages=settings.MAX_CONTEXT_MESSAGES,
        )

    def build_messages(self, text: str, language: str, history: Any) -> List[Message]:
        """
        system prompt + bounded history + the new user turn.
        History entries keep their own language; others take the request's.
        """
        past = sanitize_history(
            history, self.max_context_messages, default_language=language
        )
        return [
            Message(role=Role.SYSTEM, content=self.system_prompt, language=language),
            *past,
            Message(role=Role.USER, content=text, language=language),
        ]

    def _failure(self, kind: FailureKind, error: str, status_code: int) -> ChatFailure:
        return ChatFailure(
            kind=kind,
            error=error,
            status_code=status_code,
            fallback=self.fallback_reply,
        )

    async def handle(
        self,
        message: Any,
        language: Any = None,
        history: Any = None,
    ) -> ChatOutcome:
        text = clean_text(message)
        if text is None:
            err = InvalidMessage()
            return ChatFailure(kind=err.kind, error=err.message, status_code=err.status_code)

        lang = resolve_language(language)
        if not is_supported(lang):
            logger.info('[chat] language %r is not in the registry; forwarding as-is', lang)

        try:
            messages = self.build_messages(text, lang, history)
            logger.debug(
                '[chat] forwarding %d messages in %s', len(messages), get_language_name(lang)
            )
            reply = await self.llm.send(messages, language=lang)
        except ApiError as e:
            logger.warning('[chat] upstream failed (%s, %s): %s', e.code, e.status_code, e.message)
            return self._failure(e.kind, e.message, e.status_code)
        except Exception:
            logger.exception('[chat] unexpected error')
            return self._failure(FailureKind.UNEXPECTED, UNEXPECTED_ERROR_MESSAGE, 500)

        return ChatReply(reply=reply, language=lang)
