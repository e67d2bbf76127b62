from typing import List

from fastapi import APIRouter, Depends

from sarvam_chat.api.dto import ChatOut, ErrorOut, LanguageOut
from sarvam_chat.api.errors import outcome_to_response
from sarvam_chat.api.requests import ChatIn
from sarvam_chat.domain.languages import SUPPORTED_LANGUAGES
from sarvam_chat.infra.service import get_service
from sarvam_chat.services.chat_service import ChatService

router = APIRouter(prefix='/api')


@router.post(
    '/chat',
    response_model=ChatOut,
    responses={400: {'model': ErrorOut}, 500: {'model': ErrorOut}, 502: {'model': ErrorOut}},
)
async def post_chat(body: ChatIn, service: ChatService = Depends(get_service)):
    outcome = await service.handle(
        message=body.message,
        language=body.language,
        history=body.history,
    )
    return outcome_to_response(outcome)


@router.get('/languages', response_model=List[LanguageOut], tags=['languages'])
async def list_languages():
    return [LanguageOut(**lang.model_dump()) for lang in SUPPORTED_LANGUAGES]
