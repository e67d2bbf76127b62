from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from sarvam_chat.adapters.llm.constants import (DEFAULT_API_URL,
                                                DEFAULT_CHAT_ENDPOINT,
                                                EMPTY_RESPONSE_MESSAGE,
                                                MISSING_API_KEY_MESSAGE,
                                                UPSTREAM_UNAVAILABLE_MESSAGE,
                                                UPSTREAM_UNEXPECTED_MESSAGE,
                                                SarvamModels)
from sarvam_chat.adapters.llm.schemas import (UpstreamPayload,
                                              extract_error_detail,
                                              extract_reply)
from sarvam_chat.domain.errors import (ApiError, ConfigError,
                                       EmptyResponseError, UpstreamError)
from sarvam_chat.domain.models import Message
from sarvam_chat.domain.ports.llm import LLMPort
from sarvam_chat.utils.text import normalize_spaces, trunc

logger = logging.getLogger(__name__)


class SarvamAdapter(LLMPort):
    """
    Sends one chat-completion request to the Sarvam API per call.
    - Credentials are checked before anything goes on the wire.
    - Generation overrides left as None are omitted from the payload.
    - Every failure surfaces as an `ApiError` subclass carrying the status
      code the client should see.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = SarvamModels.CHAT_SAARTHI.value,
        base_url: str = DEFAULT_API_URL,
        endpoint: str = DEFAULT_CHAT_ENDPOINT,
        timeout_s: float = 20.0,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        max_tokens: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.url = f'{base_url.rstrip("/")}/{endpoint.lstrip("/")}'
        self.timeout_s = timeout_s
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens
        self.client = client

    # ---------- payload ----------

    def build_payload(
        self, messages: List[Message], language: Optional[str] = None
    ) -> UpstreamPayload:
        return UpstreamPayload(
            model=self.model,
            messages=list(messages),
            language=language or None,
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_tokens,
        )

    def _headers(self) -> dict:
        return {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        }

    # ---------- low-level request ----------

    async def _post(self, body: dict) -> httpx.Response:
        if self.client is not None:
            return await self.client.post(
                self.url, json=body, headers=self._headers(), timeout=self.timeout_s
            )
        async with httpx.AsyncClient(timeout=self.timeout_s) as client:
            return await client.post(self.url, json=body, headers=self._headers())

    @staticmethod
    def _json_or_none(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _status_error(self, response: httpx.Response) -> UpstreamError:
        body = self._json_or_none(response)
        message = (
            extract_error_detail(body)
            or response.reason_phrase
            or UPSTREAM_UNAVAILABLE_MESSAGE
        )
        logger.warning(
            '[sarvam] upstream returned %s: %s',
            response.status_code,
            trunc(normalize_spaces(response.text or '')),
        )
        return UpstreamError(message, response.status_code)

    # ---------- public API ----------

    async def send(self, messages: List[Message], language: Optional[str] = None) -> str:
        if not self.api_key:
            raise ConfigError(MISSING_API_KEY_MESSAGE, 500)

        payload = self.build_payload(messages, language)
        logger.debug(
            '[sarvam] POST %s model=%s messages=%d language=%s',
            self.url,
            payload.model,
            len(payload.messages),
            payload.language,
        )

        try:
            response = await self._post(payload.to_json())
        except httpx.TimeoutException as e:
            logger.warning('[sarvam] request timed out after %.2fs: %r', self.timeout_s, e)
            raise UpstreamError(UPSTREAM_UNAVAILABLE_MESSAGE, 502) from e
        except httpx.HTTPError as e:
            logger.warning('[sarvam] transport failure: %r', e)
            raise UpstreamError(UPSTREAM_UNAVAILABLE_MESSAGE, 502) from e
        except Exception as e:
            logger.exception('[sarvam] unexpected failure while calling upstream')
            raise ApiError(UPSTREAM_UNEXPECTED_MESSAGE, 500) from e

        if not response.is_success:
            raise self._status_error(response)

        reply = extract_reply(self._json_or_none(response))
        if not reply:
            raise EmptyResponseError(EMPTY_RESPONSE_MESSAGE, 500)
        return reply
