# homework_helper/services/context.py
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from homework_helper.core.exceptions import Unauthorized


@dataclass(frozen=True)
class CurrentUser:
    id: str


@dataclass
class ActionContext:
    """Контекст одного вызова: сессия БД и (возможно) пользователь."""
    db: AsyncSession
    user: Optional[CurrentUser] = None


def require_user(ctx: ActionContext) -> CurrentUser:
    if ctx.user is None:
        raise Unauthorized("You must be signed in to perform this action.")
    return ctx.user
