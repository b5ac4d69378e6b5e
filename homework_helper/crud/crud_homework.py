# homework_helper/crud/crud_homework.py
"""
Запросы к таблицам домашних заданий.

Функции только добавляют изменения в сессию (flush), фиксирует транзакцию
вызывающий код: так несколько изменений попадают в один commit.
"""
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homework_helper.models.homework import (
    HomeworkJob,
    HomeworkRequest,
    HomeworkResponse,
    RequestStatus,
)


# --- Вопросы ---

async def get_request_for_user(
    db: AsyncSession, *, request_id: int, user_id: str
) -> Optional[HomeworkRequest]:
    """Вопрос с данным ID, только если он принадлежит пользователю."""
    stmt = select(HomeworkRequest).where(
        HomeworkRequest.id == request_id,
        HomeworkRequest.user_id == user_id,
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_request(
    db: AsyncSession, *, user_id: str, now: datetime, **fields: Any
) -> HomeworkRequest:
    db_obj = HomeworkRequest(
        user_id=user_id,
        status=RequestStatus.OPEN,
        created_at=now,
        updated_at=now,
        **fields,
    )
    db.add(db_obj)
    await db.flush()
    return db_obj


def apply_changes(db_obj: Any, changes: dict[str, Any]) -> Any:
    """Переносит в ORM-объект только переданные поля."""
    for field, value in changes.items():
        setattr(db_obj, field, value)
    return db_obj


def set_request_status(request: HomeworkRequest, status: RequestStatus, *, now: datetime) -> HomeworkRequest:
    request.status = status
    request.updated_at = now
    return request


async def get_requests_for_user(
    db: AsyncSession, *, user_id: str, status: Optional[RequestStatus] = None
) -> List[HomeworkRequest]:
    stmt = select(HomeworkRequest).where(HomeworkRequest.user_id == user_id)
    if status is not None:
        stmt = stmt.where(HomeworkRequest.status == status)
    result = await db.execute(stmt.order_by(HomeworkRequest.id))
    return list(result.scalars().all())


# --- Ответы ---

async def get_response_for_request(
    db: AsyncSession, *, response_id: int, request_id: int
) -> Optional[HomeworkResponse]:
    """Ответ ищется только внутри указанного вопроса."""
    stmt = select(HomeworkResponse).where(
        HomeworkResponse.id == response_id,
        HomeworkResponse.request_id == request_id,
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_response(
    db: AsyncSession, *, request_id: int, user_id: Optional[str], now: datetime, **fields: Any
) -> HomeworkResponse:
    db_obj = HomeworkResponse(request_id=request_id, user_id=user_id, created_at=now, **fields)
    db.add(db_obj)
    await db.flush()
    return db_obj


async def get_responses_for_request(db: AsyncSession, *, request_id: int) -> List[HomeworkResponse]:
    stmt = (
        select(HomeworkResponse)
        .where(HomeworkResponse.request_id == request_id)
        .order_by(HomeworkResponse.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


# --- Задачи генерации ---

async def create_job(
    db: AsyncSession, *, user_id: str, now: datetime, **fields: Any
) -> HomeworkJob:
    db_obj = HomeworkJob(user_id=user_id, created_at=now, **fields)
    db.add(db_obj)
    await db.flush()
    return db_obj


async def get_jobs_for_user(
    db: AsyncSession, *, user_id: str, request_id: Optional[int] = None
) -> List[HomeworkJob]:
    stmt = select(HomeworkJob).where(HomeworkJob.user_id == user_id)
    if request_id is not None:
        stmt = stmt.where(HomeworkJob.request_id == request_id)
    result = await db.execute(stmt.order_by(HomeworkJob.id))
    return list(result.scalars().all())
