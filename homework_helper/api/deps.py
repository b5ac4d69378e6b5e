# homework_helper/api/deps.py
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from homework_helper.core import security
from homework_helper.db.session import get_db
from homework_helper.services.context import ActionContext, CurrentUser, require_user

# auto_error=False: нет заголовка или схема не Bearer значит "нет пользователя"
bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[CurrentUser]:
    """
    Пользователь из токена внешнего провайдера сессий или None.
    Невалидный токен считается ошибкой авторизации.
    """
    if credentials is None:
        return None

    token_data = security.decode_access_token(credentials.credentials)
    return CurrentUser(id=token_data.user_id)


async def get_action_context(
    db: AsyncSession = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_optional_user),
) -> ActionContext:
    """
    Контекст вызова операции.
    Проверка пользователя выполняется здесь, до валидации тела запроса.
    """
    ctx = ActionContext(db=db, user=user)
    require_user(ctx)
    return ctx
