"""
Conversão dos erros da aplicação em respostas HTTP

ERROR_RESPONSES é a tabela única erro -> (status, corpo). A busca percorre o
MRO da exceção, então a entrada mais específica vence.
"""
import logging
from typing import Callable, Dict, Tuple, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from instagram.core.exceptions import (
    FieldAlreadyExistsError,
    InstagramError,
    InvalidArgumentError,
    InvalidCredentialsError,
    InvalidTokenError,
    StorageError,
    UniquenessViolationError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def conflict_body(status_code: int, exc: InstagramError) -> Response:
    return JSONResponse(
        status_code=status_code,
        content={"error": "Conflict", "message": exc.message},
    )


def plain_message(status_code: int, exc: InstagramError) -> Response:
    return PlainTextResponse(exc.message, status_code=status_code)


def unauthenticated(status_code: int, exc: InstagramError) -> Response:
    return Response(status_code=status_code, headers={"WWW-Authenticate": "Bearer"})


def opaque(status_code: int, exc: Exception) -> Response:
    return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=status_code)


ResponseBuilder = Callable[[int, InstagramError], Response]

ERROR_RESPONSES: Dict[Type[InstagramError], Tuple[int, ResponseBuilder]] = {
    FieldAlreadyExistsError: (status.HTTP_409_CONFLICT, conflict_body),
    UniquenessViolationError: (status.HTTP_409_CONFLICT, conflict_body),
    UserNotFoundError: (status.HTTP_404_NOT_FOUND, plain_message),
    InvalidArgumentError: (status.HTTP_400_BAD_REQUEST, plain_message),
    InvalidCredentialsError: (status.HTTP_401_UNAUTHORIZED, plain_message),
    InvalidTokenError: (status.HTTP_401_UNAUTHORIZED, unauthenticated),
    StorageError: (status.HTTP_500_INTERNAL_SERVER_ERROR, opaque),
}


def resolve(exc: InstagramError) -> Tuple[int, ResponseBuilder]:
    for klass in type(exc).__mro__:
        if klass in ERROR_RESPONSES:
            return ERROR_RESPONSES[klass]
    return status.HTTP_500_INTERNAL_SERVER_ERROR, opaque


def setup_exception_handlers(app: FastAPI) -> None:
    """Registra os handlers de erro na aplicação"""

    @app.exception_handler(InstagramError)
    async def instagram_error_handler(request: Request, exc: InstagramError) -> Response:
        status_code, builder = resolve(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                f"Erro não recuperado em {request.method} {request.url.path}: {exc.message}",
                exc_info=exc,
            )
        else:
            logger.warning(
                f"{type(exc).__name__} em {request.method} {request.url.path}: {exc.message}"
            )
        return builder(status_code, exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> Response:
        logger.error(
            f"Erro inesperado em {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return opaque(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)
