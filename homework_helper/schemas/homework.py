# homework_helper/schemas/homework.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from homework_helper.models.homework import JobStatus, JobType, RequestStatus, ResponseSource
from .utils import CamelModel, ItemList

AT_LEAST_ONE_FIELD_MESSAGE = "At least one field must be provided to update."


class _PartialUpdate(CamelModel):
    """
    Схема частичного обновления.
    Отсутствующее поле и поле со значением различаются через model_fields_set,
    явный null не принимается.
    """

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value

    @model_validator(mode="after")
    def require_any_field(self):
        if not self.model_fields_set:
            raise ValueError(AT_LEAST_ONE_FIELD_MESSAGE)
        return self

    def changes(self) -> Dict[str, Any]:
        """Только явно переданные поля."""
        return self.model_dump(exclude_unset=True)


# --- Вопросы (requests) ---

class HomeworkRequestCreate(CamelModel):
    subject: Optional[str] = None
    grade_level: Optional[str] = None
    topic: Optional[str] = None
    title: Optional[str] = None
    question_text: str = Field(min_length=1)
    attachments: Optional[Dict[str, Any]] = None


class HomeworkRequestUpdate(_PartialUpdate):
    subject: Optional[str] = None
    grade_level: Optional[str] = None
    topic: Optional[str] = None
    title: Optional[str] = None
    question_text: Optional[str] = Field(default=None, min_length=1)
    attachments: Optional[Dict[str, Any]] = None
    status: Optional[RequestStatus] = None


class HomeworkRequestOut(CamelModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)

    id: int
    user_id: str
    subject: Optional[str] = None
    grade_level: Optional[str] = None
    topic: Optional[str] = None
    title: Optional[str] = None
    question_text: str
    attachments: Optional[Dict[str, Any]] = None
    status: RequestStatus
    created_at: datetime
    updated_at: datetime


# --- Ответы (responses) ---

class HomeworkResponseCreate(CamelModel):
    answer_text: str = Field(min_length=1)
    steps: Optional[List[Any]] = None
    is_accepted: Optional[bool] = Field(default=None, strict=True)
    rating: Optional[int] = Field(default=None, ge=1, le=5, strict=True)
    feedback: Optional[str] = None
    source: Optional[ResponseSource] = None


class HomeworkResponseUpdate(_PartialUpdate):
    is_accepted: Optional[bool] = Field(default=None, strict=True)
    rating: Optional[int] = Field(default=None, ge=1, le=5, strict=True)
    feedback: Optional[str] = None


class HomeworkResponseOut(CamelModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)

    id: int
    request_id: int
    user_id: Optional[str] = None
    source: ResponseSource
    answer_text: str
    steps: Optional[List[Any]] = None
    is_accepted: bool
    rating: Optional[int] = None
    feedback: Optional[str] = None
    created_at: datetime


# --- Задачи генерации (jobs) ---

class HomeworkJobCreate(CamelModel):
    request_id: Optional[int] = Field(default=None, strict=True)
    job_type: Optional[JobType] = None
    input: Optional[Dict[str, Any]] = None
    output: Optional[Dict[str, Any]] = None
    status: Optional[JobStatus] = None


class HomeworkJobOut(CamelModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)

    id: int
    request_id: Optional[int] = None
    user_id: Optional[str] = None
    job_type: JobType
    input: Optional[Dict[str, Any]] = None
    output: Optional[Dict[str, Any]] = None
    status: JobStatus
    created_at: datetime


# --- Содержимое поля "data" в ответах API ---

class RequestData(CamelModel):
    request: HomeworkRequestOut


class ResponseData(CamelModel):
    response: HomeworkResponseOut


class JobData(CamelModel):
    job: HomeworkJobOut


class RequestList(ItemList[HomeworkRequestOut]):
    pass


class ResponseList(ItemList[HomeworkResponseOut]):
    pass


class JobList(ItemList[HomeworkJobOut]):
    pass
