import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from sarvam_chat.api.errors import register_exception_handlers
from sarvam_chat.api.routes import router
from sarvam_chat.infra.llm import get_llm
from sarvam_chat.settings import get_settings

logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format='[%(asctime)s] %(levelname)s %(name)s - %(message)s',
)
logger = logging.getLogger('sarvam_chat')


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    app.state.settings = settings
    app.state.http_client = httpx.AsyncClient(timeout=settings.timeout_s)
    app.state.llm = get_llm(settings, client=app.state.http_client)
    logger.info(
        'Config: provider=%s model=%s key_set=%s context_window=%s',
        settings.LLM_PROVIDER.value,
        settings.SARVAM_MODEL,
        bool(settings.SARVAM_API_KEY),
        settings.MAX_CONTEXT_MESSAGES,
    )
    try:
        yield
    finally:
        await app.state.http_client.aclose()


app = FastAPI(title='Sarvam Chat', lifespan=lifespan)

app.include_router(router)

register_exception_handlers(app)


@app.get('/', tags=['health'])
async def healthcheck():
    return {'Welcome to Sarvam Chat': 'POST /api/chat to start a conversation'}
