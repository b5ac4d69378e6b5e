# homework_helper/schemas/utils.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Generic, Literal, TypeVar

T = TypeVar('T')


class CamelModel(BaseModel):
    """Базовая схема: snake_case в Python, camelCase в JSON (принимаем оба варианта)."""
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class ItemList(CamelModel, Generic[T]):
    items: List[T]
    total: int


class ActionResult(CamelModel, Generic[T]):
    """Единый конверт успешного ответа: {"success": true, "data": {...}}."""
    success: Literal[True] = True
    data: T
