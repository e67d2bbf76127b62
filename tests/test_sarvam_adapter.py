import json

import httpx
import pytest
import pytest_asyncio

from sarvam_chat.adapters.llm.constants import (EMPTY_RESPONSE_MESSAGE,
                                                MISSING_API_KEY_MESSAGE,
                                                UPSTREAM_UNAVAILABLE_MESSAGE,
                                                UPSTREAM_UNEXPECTED_MESSAGE)
from sarvam_chat.adapters.llm.sarvam import SarvamAdapter
from sarvam_chat.domain.errors import (ApiError, ConfigError,
                                       EmptyResponseError, FailureKind,
                                       UpstreamError)
from sarvam_chat.domain.models import Message

MESSAGES = [
    Message(role='system', content='be helpful', language='hi'),
    Message(role='user', content='namaste', language='hi'),
]


@pytest_asyncio.fixture()
async def make_adapter():
    """
    Build adapters backed by an httpx.MockTransport that records every
    request. Clients are closed after the test.
    """
    clients = []

    def _make(handler, **overrides):
        calls = []

        def recording(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
        clients.append(client)
        kwargs = dict(
            api_key='sk-test',
            base_url='https://sarvam.test/v1',
            endpoint='/chat/completions',
        )
        kwargs.update(overrides)
        return SarvamAdapter(client=client, **kwargs), calls

    yield _make

    for client in clients:
        await client.aclose()


def reply_with(body, status_code=200):
    return lambda request: httpx.Response(status_code, json=body)


def test_adapter_config_defaults():
    adapter = SarvamAdapter(api_key='sk-test')

    assert adapter.model == 'chat-saarthi'
    assert adapter.url == 'https://api.sarvam.ai/v1/chat/completions'
    assert adapter.timeout_s == 20.0
    assert adapter.client is None


def test_payload_omits_unset_generation_params():
    adapter = SarvamAdapter(api_key='sk-test')

    body = adapter.build_payload(MESSAGES, language='hi').to_json()

    assert body == {
        'model': 'chat-saarthi',
        'messages': [
            {'role': 'system', 'content': 'be helpful', 'language': 'hi'},
            {'role': 'user', 'content': 'namaste', 'language': 'hi'},
        ],
        'language': 'hi',
    }


def test_payload_includes_configured_generation_params():
    adapter = SarvamAdapter(api_key='sk-test', temperature=0.2, top_p=0.9, max_tokens=256)

    body = adapter.build_payload(MESSAGES).to_json()

    assert body['temperature'] == 0.2
    assert body['top_p'] == 0.9
    assert body['max_tokens'] == 256
    assert 'language' not in body


def test_zero_temperature_is_kept():
    adapter = SarvamAdapter(api_key='sk-test', temperature=0.0)

    assert adapter.build_payload(MESSAGES).to_json()['temperature'] == 0.0


@pytest.mark.asyncio
async def test_send_posts_payload_with_bearer_auth(make_adapter):
    adapter, calls = make_adapter(
        reply_with({'choices': [{'message': {'content': '  hello  '}}]}),
        temperature=0.5,
    )

    reply = await adapter.send(MESSAGES, language='hi')

    assert reply == 'hello'
    assert len(calls) == 1
    request = calls[0]
    assert request.method == 'POST'
    assert str(request.url) == 'https://sarvam.test/v1/chat/completions'
    assert request.headers['Authorization'] == 'Bearer sk-test'
    assert request.headers['Content-Type'] == 'application/json'
    sent = json.loads(request.content)
    assert sent['model'] == 'chat-saarthi'
    assert sent['language'] == 'hi'
    assert sent['temperature'] == 0.5
    assert 'top_p' not in sent and 'max_tokens' not in sent
    assert [m['role'] for m in sent['messages']] == ['system', 'user']


@pytest.mark.asyncio
async def test_send_extracts_flat_output(make_adapter):
    adapter, _ = make_adapter(reply_with({'output': 'hola'}))

    assert await adapter.send(MESSAGES) == 'hola'


@pytest.mark.asyncio
async def test_missing_api_key_fails_before_network(make_adapter):
    adapter, calls = make_adapter(reply_with({'output': 'never'}), api_key=None)

    with pytest.raises(ConfigError) as exc:
        await adapter.send(MESSAGES)

    assert exc.value.status_code == 500
    assert exc.value.message == MISSING_API_KEY_MESSAGE
    assert exc.value.kind == FailureKind.CONFIGURATION
    assert calls == []


@pytest.mark.asyncio
async def test_empty_response_raises(make_adapter):
    adapter, _ = make_adapter(reply_with({'choices': [], 'output': '   '}))

    with pytest.raises(EmptyResponseError) as exc:
        await adapter.send(MESSAGES)

    assert exc.value.status_code == 500
    assert exc.value.message == EMPTY_RESPONSE_MESSAGE


@pytest.mark.asyncio
async def test_non_json_success_body_is_empty_response(make_adapter):
    adapter, _ = make_adapter(lambda request: httpx.Response(200, text='<html>ok</html>'))

    with pytest.raises(EmptyResponseError):
        await adapter.send(MESSAGES)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    'body, expected',
    [
        ({'error': 'Invalid API key'}, 'Invalid API key'),
        ({'error': {'message': 'quota exhausted', 'code': 'quota'}}, 'quota exhausted'),
        ({'message': 'model not found'}, 'model not found'),
        ({'error': '', 'message': 'fallback detail'}, 'fallback detail'),
    ],
)
async def test_upstream_status_error_uses_body_detail(make_adapter, body, expected):
    adapter, _ = make_adapter(reply_with(body, status_code=401))

    with pytest.raises(UpstreamError) as exc:
        await adapter.send(MESSAGES)

    assert exc.value.status_code == 401
    assert exc.value.message == expected
    assert exc.value.kind == FailureKind.UPSTREAM


@pytest.mark.asyncio
async def test_upstream_status_error_falls_back_to_reason_phrase(make_adapter):
    adapter, _ = make_adapter(lambda request: httpx.Response(503, text='down'))

    with pytest.raises(UpstreamError) as exc:
        await adapter.send(MESSAGES)

    assert exc.value.status_code == 503
    assert exc.value.message == 'Service Unavailable'


@pytest.mark.asyncio
async def test_upstream_status_error_without_reason_uses_generic_message(make_adapter):
    adapter, _ = make_adapter(lambda request: httpx.Response(599, json={}))

    with pytest.raises(UpstreamError) as exc:
        await adapter.send(MESSAGES)

    assert exc.value.status_code == 599
    assert exc.value.message == UPSTREAM_UNAVAILABLE_MESSAGE


@pytest.mark.asyncio
async def test_timeout_maps_to_502(make_adapter):
    def handler(request):
        raise httpx.ReadTimeout('timed out', request=request)

    adapter, calls = make_adapter(handler)

    with pytest.raises(UpstreamError) as exc:
        await adapter.send(MESSAGES)

    assert exc.value.status_code == 502
    assert exc.value.message == UPSTREAM_UNAVAILABLE_MESSAGE
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_connection_error_maps_to_502(make_adapter):
    def handler(request):
        raise httpx.ConnectError('refused', request=request)

    adapter, _ = make_adapter(handler)

    with pytest.raises(UpstreamError) as exc:
        await adapter.send(MESSAGES)

    assert exc.value.status_code == 502


@pytest.mark.asyncio
async def test_unexpected_client_failure_is_wrapped(make_adapter):
    def handler(request):
        raise RuntimeError('boom')

    adapter, _ = make_adapter(handler)

    with pytest.raises(ApiError) as exc:
        await adapter.send(MESSAGES)

    assert type(exc.value) is ApiError
    assert exc.value.status_code == 500
    assert exc.value.message == UPSTREAM_UNEXPECTED_MESSAGE
    assert isinstance(exc.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_send_without_injected_client(monkeypatch):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={'response': 'ok'}))
    real_client = httpx.AsyncClient

    def client_factory(*args, **kwargs):
        kwargs['transport'] = transport
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, 'AsyncClient', client_factory)
    adapter = SarvamAdapter(api_key='sk-test', timeout_s=1.5)

    assert await adapter.send(MESSAGES) == 'ok'
