from typing import List, Optional

from sarvam_chat.domain.models import Message
from sarvam_chat.domain.ports.llm import LLMPort


class DummyLLMAdapter(LLMPort):
    async def send(self, messages: List[Message], language: Optional[str] = None) -> str:
        last = messages[-1].content if messages else ''
        return f'[{language or "en"}] After considering your last {len(messages)} messages: {last}'
