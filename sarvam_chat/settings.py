from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sarvam_chat.adapters.llm.constants import (DEFAULT_API_URL,
                                                DEFAULT_CHAT_ENDPOINT,
                                                DEFAULT_FALLBACK_RESPONSE,
                                                DEFAULT_SYSTEM_PROMPT,
                                                Provider, SarvamModels)


class Settings(BaseSettings):
    # VAR= in the environment or .env counts as unset
    model_config = SettingsConfigDict(env_file='.env', env_ignore_empty=True, extra='ignore')

    LLM_PROVIDER: Provider = Provider.SARVAM
    SARVAM_MODEL: str = SarvamModels.CHAT_SAARTHI.value
    SARVAM_API_URL: str = DEFAULT_API_URL
    SARVAM_CHAT_ENDPOINT: str = DEFAULT_CHAT_ENDPOINT
    SARVAM_API_KEY: Optional[str] = None
    SARVAM_TIMEOUT_MS: float = Field(default=20000, ge=1)
    SARVAM_TEMPERATURE: Optional[float] = None
    SARVAM_TOP_P: Optional[float] = None
    SARVAM_MAX_TOKENS: Optional[int] = None
    SARVAM_SYSTEM_PROMPT: str = DEFAULT_SYSTEM_PROMPT
    CHATBOT_FALLBACK_RESPONSE: str = DEFAULT_FALLBACK_RESPONSE
    MAX_CONTEXT_MESSAGES: int = Field(default=12, ge=0)
    LOG_LEVEL: str = 'INFO'

    @field_validator(
        'SARVAM_API_KEY',
        'SARVAM_TEMPERATURE',
        'SARVAM_TOP_P',
        'SARVAM_MAX_TOKENS',
        mode='before',
    )
    def allow_blank(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @field_validator(
        'SARVAM_MODEL',
        'SARVAM_API_URL',
        'SARVAM_CHAT_ENDPOINT',
        'SARVAM_TIMEOUT_MS',
        'SARVAM_SYSTEM_PROMPT',
        'CHATBOT_FALLBACK_RESPONSE',
        'MAX_CONTEXT_MESSAGES',
        'LOG_LEVEL',
        mode='before',
    )
    def default_when_blank(cls, v, info: ValidationInfo):
        if v is None or (isinstance(v, str) and not v.strip()):
            return cls.model_fields[info.field_name].default
        return v.strip() if isinstance(v, str) else v

    @field_validator('LLM_PROVIDER', mode='before')
    def normalize_provider(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return Provider.SARVAM
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def timeout_s(self) -> float:
        return self.SARVAM_TIMEOUT_MS / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Build once per process
    return Settings()
