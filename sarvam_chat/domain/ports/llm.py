import abc
from typing import List, Optional

from sarvam_chat.domain.models import Message


class LLMPort(abc.ABC):
    @abc.abstractmethod
    async def send(self, messages: List[Message], language: Optional[str] = None) -> str:
        """
        Given the full outbound message list (system prompt, history and the
        new user turn), return the assistant's reply as plain text.

        Implementations raise `ApiError` subclasses on failure.
        """
        raise NotImplementedError
