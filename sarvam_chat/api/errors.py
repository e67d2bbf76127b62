from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette import status as st
from starlette.responses import JSONResponse

from sarvam_chat.domain import errors as de
from sarvam_chat.domain.models import ChatFailure, ChatOutcome, ChatReply


def outcome_to_response(outcome: ChatOutcome) -> JSONResponse:
    if isinstance(outcome, ChatReply):
        return JSONResponse(
            status_code=st.HTTP_200_OK,
            content={'reply': outcome.reply, 'language': outcome.language},
        )

    if isinstance(outcome, ChatFailure):
        content = {'error': outcome.error}
        if outcome.fallback is not None:
            content['fallback'] = outcome.fallback
        return JSONResponse(status_code=outcome.status_code, content=content)

    raise TypeError(f'unsupported chat outcome: {type(outcome).__name__}')


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _400_bad_body(_: Request, exc: RequestValidationError):
        # non-JSON bodies and non-string messages are both a missing message
        err = de.InvalidMessage()
        return JSONResponse(status_code=err.status_code, content={'error': err.message})

    # Exception handlers cannot take Depends; routes and handlers both read app.state.settings
    @app.exception_handler(de.DomainError)
    async def _domain_error(request: Request, exc: de.DomainError):
        content = {'error': exc.message}
        if exc.kind != de.FailureKind.VALIDATION:
            content['fallback'] = request.app.state.settings.CHATBOT_FALLBACK_RESPONSE
        return JSONResponse(status_code=exc.status_code, content=content)
