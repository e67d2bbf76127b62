from typing import Optional

import httpx

from sarvam_chat.adapters.llm.constants import Provider
from sarvam_chat.adapters.llm.dummy import DummyLLMAdapter
from sarvam_chat.adapters.llm.sarvam import SarvamAdapter
from sarvam_chat.domain.ports.llm import LLMPort
from sarvam_chat.settings import Settings


def make_sarvam(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> SarvamAdapter:
    # A missing key is reported per request by the adapter, not at startup
    return SarvamAdapter(
        api_key=settings.SARVAM_API_KEY,
        model=settings.SARVAM_MODEL,
        base_url=settings.SARVAM_API_URL,
        endpoint=settings.SARVAM_CHAT_ENDPOINT,
        timeout_s=settings.timeout_s,
        temperature=settings.SARVAM_TEMPERATURE,
        top_p=settings.SARVAM_TOP_P,
        max_tokens=settings.SARVAM_MAX_TOKENS,
        client=client,
    )


def get_llm(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> LLMPort:
    if settings.LLM_PROVIDER == Provider.DUMMY:
        return DummyLLMAdapter()
    return make_sarvam(settings, client=client)
