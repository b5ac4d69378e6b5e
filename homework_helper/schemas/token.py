# homework_helper/schemas/token.py
from pydantic import BaseModel


class TokenData(BaseModel):
    # "sub" из токена внешнего провайдера сессий
    user_id: str
