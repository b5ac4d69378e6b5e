# homework_helper/core/exceptions.py
import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ActionError(Exception):
    """
    Типизированная ошибка операции: стабильный код + сообщение для пользователя.
    """
    code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ActionError):
    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "You must be signed in to perform this action."


class NotFound(ActionError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class ActionValidationError(ActionError):
    code = "BAD_REQUEST"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input."


def _error_payload(code: str, message: str, **extra: Any) -> dict[str, Any]:
    return {"success": False, "error": {"code": code, "message": message, **extra}}


def _sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Оставляем только путь и текст ошибки, сырой ввод клиенту не возвращаем."""
    sanitized = []
    for error in errors:
        sanitized.append({
            "path": [str(part) for part in error.get("loc", ())],
            "message": str(error.get("msg", "")),
        })
    return sanitized


async def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_payload(exc.code, exc.message))


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Ошибки валидации входных данных превращаем в BAD_REQUEST."""
    issues = _sanitize_validation_errors(list(exc.errors()))
    message = issues[0]["message"] if issues else ActionValidationError.default_message
    # pydantic добавляет префикс "Value error, " к сообщениям из валидаторов
    message = message.removeprefix("Value error, ")
    return JSONResponse(
        status_code=ActionValidationError.status_code,
        content=_error_payload(ActionValidationError.code, message, issues=issues),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Все неклассифицированные ошибки (в т.ч. от БД) отдаем как 500 без подробностей."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_payload("INTERNAL_SERVER_ERROR", "Internal Server Error"),
    )
