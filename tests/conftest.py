# conftest.py
import os

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

load_dotenv()

# Keep local credentials out of the suite and pin defaults BEFORE importing sarvam_chat.main
os.environ['SARVAM_API_KEY'] = ''
os.environ.setdefault('LLM_PROVIDER', 'sarvam')
os.environ.setdefault('LOG_LEVEL', 'INFO')


@pytest.fixture()
def settings():
    """Explicit settings per test; never read from a local .env."""
    from sarvam_chat.settings import Settings

    return Settings(
        _env_file=None,
        SARVAM_API_KEY='sk-test',
        SARVAM_API_URL='https://sarvam.test/v1',
        CHATBOT_FALLBACK_RESPONSE='Please try again later.',
        MAX_CONTEXT_MESSAGES=4,
    )


@pytest.fixture()
def llm():
    from tests.fakes import FakeLLM

    return FakeLLM(reply='namaste')


@pytest.fixture()
def client(settings, llm):
    """
    A TestClient wired to per-test settings and a fake upstream.
    Settings replace the lifespan-built ones on app.state so routes and
    exception handlers see the same values.
    """
    from sarvam_chat.infra.service import get_llm_port
    from sarvam_chat.main import app

    app.dependency_overrides[get_llm_port] = lambda: llm
    try:
        with TestClient(app) as c:
            app.state.settings = settings
            yield c
    finally:
        app.dependency_overrides.clear()
