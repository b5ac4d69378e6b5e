from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from homework_helper.core.config import settings
from homework_helper.core.exceptions import Unauthorized
from homework_helper.schemas.token import TokenData


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Выпускает токен в том же формате, что и внешний провайдер сессий.
    Используется в тестах и для локальной разработки.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> TokenData:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise Unauthorized("Could not validate credentials.")

    user_id = payload.get("sub")
    if user_id is None or str(user_id) == "":
        raise Unauthorized("Could not validate credentials.")
    return TokenData(user_id=str(user_id))
