# homework_helper/services/homework.py
"""
Операции над вопросами, ответами и задачами генерации.

Каждая операция принимает ActionContext и провалидированную схему ввода,
сначала проверяет пользователя, затем владение вопросом, и возвращает
содержимое поля "data" для ответа API. Все изменения одной операции
фиксируются одним commit.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from homework_helper.core.exceptions import NotFound
from homework_helper.crud import crud_homework
from homework_helper.models.homework import (
    HomeworkRequest,
    HomeworkResponse,
    JobStatus,
    JobType,
    RequestStatus,
    ResponseSource,
)
from homework_helper.schemas.homework import (
    HomeworkJobCreate,
    HomeworkRequestCreate,
    HomeworkRequestUpdate,
    HomeworkResponseCreate,
    HomeworkResponseUpdate,
)
from homework_helper.services.context import ActionContext, require_user

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def get_owned_request(ctx: ActionContext, request_id: int, user_id: str) -> HomeworkRequest:
    """
    Возвращает вопрос пользователя.
    Чужой и несуществующий вопрос дают одну и ту же ошибку NotFound.
    """
    request = await crud_homework.get_request_for_user(ctx.db, request_id=request_id, user_id=user_id)
    if not request:
        logger.warning(f"Homework request {request_id} not found for user {user_id}")
        raise NotFound("Homework request not found.")
    return request


def set_response_acceptance(
    request: HomeworkRequest, response: HomeworkResponse, accepted: bool, *, now: datetime
) -> None:
    """
    Отмечает ответ принятым / непринятым и синхронизирует статус вопроса.
    Статус отражает последнее переключение, а не наличие других принятых ответов.
    """
    response.is_accepted = accepted
    new_status = RequestStatus.ANSWERED if accepted else RequestStatus.OPEN
    crud_homework.set_request_status(request, new_status, now=now)


# --- Вопросы ---

async def create_homework_request(ctx: ActionContext, payload: HomeworkRequestCreate) -> Dict[str, Any]:
    user = require_user(ctx)
    now = utcnow()

    request = await crud_homework.create_request(
        ctx.db,
        user_id=user.id,
        now=now,
        subject=payload.subject,
        grade_level=payload.grade_level,
        topic=payload.topic,
        title=payload.title,
        question_text=payload.question_text,
        attachments=payload.attachments,
    )
    await ctx.db.commit()
    await ctx.db.refresh(request)

    logger.info(f"User {user.id} created homework request {request.id}")
    return {"request": request}


async def update_homework_request(
    ctx: ActionContext, request_id: int, payload: HomeworkRequestUpdate
) -> Dict[str, Any]:
    user = require_user(ctx)
    request = await get_owned_request(ctx, request_id, user.id)

    changes = payload.changes()
    crud_homework.apply_changes(request, changes)
    request.updated_at = utcnow()

    await ctx.db.commit()
    await ctx.db.refresh(request)

    logger.info(f"User {user.id} updated homework request {request.id}: {sorted(changes)}")
    return {"request": request}


async def list_homework_requests(
    ctx: ActionContext, status: Optional[RequestStatus] = None
) -> Dict[str, Any]:
    user = require_user(ctx)
    requests = await crud_homework.get_requests_for_user(ctx.db, user_id=user.id, status=status)
    return {"items": requests, "total": len(requests)}


# --- Ответы ---

async def add_homework_response(
    ctx: ActionContext, request_id: int, payload: HomeworkResponseCreate
) -> Dict[str, Any]:
    user = require_user(ctx)
    request = await get_owned_request(ctx, request_id, user.id)
    now = utcnow()

    response = await crud_homework.create_response(
        ctx.db,
        request_id=request.id,
        user_id=user.id,
        now=now,
        source=payload.source or ResponseSource.AI,
        answer_text=payload.answer_text,
        steps=payload.steps,
        is_accepted=False,
        rating=payload.rating,
        feedback=payload.feedback,
    )
    if payload.is_accepted:
        set_response_acceptance(request, response, True, now=now)

    await ctx.db.commit()
    await ctx.db.refresh(response)

    logger.info(
        f"User {user.id} added response {response.id} to request {request.id} "
        f"(accepted={response.is_accepted})"
    )
    return {"response": response}


async def update_homework_response(
    ctx: ActionContext, request_id: int, response_id: int, payload: HomeworkResponseUpdate
) -> Dict[str, Any]:
    user = require_user(ctx)
    request = await get_owned_request(ctx, request_id, user.id)

    response = await crud_homework.get_response_for_request(
        ctx.db, response_id=response_id, request_id=request.id
    )
    if not response:
        raise NotFound("Response not found.")

    changes = payload.changes()
    accepted = changes.pop("is_accepted", None)
    crud_homework.apply_changes(response, changes)
    if accepted is not None:
        set_response_acceptance(request, response, accepted, now=utcnow())
        logger.info(f"Response {response.id} acceptance set to {accepted}; request {request.id} is now {request.status.value}")

    await ctx.db.commit()
    await ctx.db.refresh(response)
    return {"response": response}


async def list_homework_responses(ctx: ActionContext, request_id: int) -> Dict[str, Any]:
    user = require_user(ctx)
    request = await get_owned_request(ctx, request_id, user.id)
    responses = await crud_homework.get_responses_for_request(ctx.db, request_id=request.id)
    return {"items": responses, "total": len(responses)}


# --- Задачи генерации ---

async def create_homework_job(ctx: ActionContext, payload: HomeworkJobCreate) -> Dict[str, Any]:
    user = require_user(ctx)
    if payload.request_id is not None:
        await get_owned_request(ctx, payload.request_id, user.id)

    job = await crud_homework.create_job(
        ctx.db,
        user_id=user.id,
        now=utcnow(),
        request_id=payload.request_id,
        job_type=payload.job_type or JobType.FULL_SOLUTION,
        input=payload.input,
        output=payload.output,
        status=payload.status or JobStatus.COMPLETED,
    )
    await ctx.db.commit()
    await ctx.db.refresh(job)

    logger.info(f"User {user.id} recorded {job.job_type.value} job {job.id} ({job.status.value})")
    return {"job": job}


async def list_homework_jobs(ctx: ActionContext, request_id: Optional[int] = None) -> Dict[str, Any]:
    user = require_user(ctx)
    jobs = await crud_homework.get_jobs_for_user(ctx.db, user_id=user.id, request_id=request_id)
    return {"items": jobs, "total": len(jobs)}
