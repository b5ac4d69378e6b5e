# homework_helper/api/v1/endpoints/homework.py

from fastapi import APIRouter, Depends, Query, status
from typing import Optional, Annotated

from homework_helper.api import deps
from homework_helper.models.homework import RequestStatus
from homework_helper.schemas.homework import (
    HomeworkJobCreate,
    HomeworkRequestCreate,
    HomeworkRequestUpdate,
    HomeworkResponseCreate,
    HomeworkResponseUpdate,
    JobData,
    JobList,
    RequestData,
    RequestList,
    ResponseData,
    ResponseList,
)
from homework_helper.schemas.utils import ActionResult
from homework_helper.services import homework as homework_service
from homework_helper.services.context import ActionContext

router = APIRouter()


# --- Вопросы ---

@router.post(
    "/requests",
    response_model=ActionResult[RequestData],
    status_code=status.HTTP_201_CREATED,
    operation_id="createHomeworkRequest",
    summary="Submit a homework question"
)
async def create_homework_request(
    request_in: HomeworkRequestCreate,
    ctx: ActionContext = Depends(deps.get_action_context),
):
    data = await homework_service.create_homework_request(ctx, request_in)
    return {"success": True, "data": data}


@router.patch(
    "/requests/{request_id}",
    response_model=ActionResult[RequestData],
    operation_id="updateHomeworkRequest",
    summary="Update my homework question"
)
async def update_homework_request(
    request_id: int,
    request_in: HomeworkRequestUpdate,
    ctx: ActionContext = Depends(deps.get_action_context),
):
    """
    Частичное обновление: меняются только переданные поля.
    Нужно передать хотя бы одно поле.
    """
    data = await homework_service.update_homework_request(ctx, request_id, request_in)
    return {"success": True, "data": data}


@router.get(
    "/requests",
    response_model=ActionResult[RequestList],
    operation_id="listHomeworkRequests",
    summary="List my homework questions"
)
async def list_homework_requests(
    ctx: ActionContext = Depends(deps.get_action_context),
    status: Annotated[
        Optional[RequestStatus],
        Query(description="Фильтр по статусу: 'open', 'answered' или 'closed'")
    ] = None,
):
    data = await homework_service.list_homework_requests(ctx, status=status)
    return {"success": True, "data": data}


# --- Ответы ---

@router.post(
    "/requests/{request_id}/responses",
    response_model=ActionResult[ResponseData],
    status_code=status.HTTP_201_CREATED,
    operation_id="addHomeworkResponse",
    summary="Add a response to my homework question"
)
async def add_homework_response(
    request_id: int,
    response_in: HomeworkResponseCreate,
    ctx: ActionContext = Depends(deps.get_action_context),
):
    """
    Если ответ сразу помечен принятым, вопрос переходит в статус 'answered'.
    """
    data = await homework_service.add_homework_response(ctx, request_id, response_in)
    return {"success": True, "data": data}


@router.patch(
    "/requests/{request_id}/responses/{response_id}",
    response_model=ActionResult[ResponseData],
    operation_id="updateHomeworkResponse",
    summary="Accept, rate or comment on a response"
)
async def update_homework_response(
    request_id: int,
    response_id: int,
    response_in: HomeworkResponseUpdate,
    ctx: ActionContext = Depends(deps.get_action_context),
):
    """
    isAccepted=true переводит вопрос в 'answered', isAccepted=false возвращает в 'open'.
    """
    data = await homework_service.update_homework_response(ctx, request_id, response_id, response_in)
    return {"success": True, "data": data}


@router.get(
    "/requests/{request_id}/responses",
    response_model=ActionResult[ResponseList],
    operation_id="listHomeworkResponses",
    summary="List responses for my homework question"
)
async def list_homework_responses(
    request_id: int,
    ctx: ActionContext = Depends(deps.get_action_context),
):
    data = await homework_service.list_homework_responses(ctx, request_id)
    return {"success": True, "data": data}


# --- Задачи генерации ---

@router.post(
    "/jobs",
    response_model=ActionResult[JobData],
    status_code=status.HTTP_201_CREATED,
    operation_id="createHomeworkJob",
    summary="Record an AI generation job"
)
async def create_homework_job(
    job_in: HomeworkJobCreate,
    ctx: ActionContext = Depends(deps.get_action_context),
):
    data = await homework_service.create_homework_job(ctx, job_in)
    return {"success": True, "data": data}


@router.get(
    "/jobs",
    response_model=ActionResult[JobList],
    operation_id="listHomeworkJobs",
    summary="List my AI generation jobs"
)
async def list_homework_jobs(
    ctx: ActionContext = Depends(deps.get_action_context),
    request_id: Annotated[
        Optional[int],
        Query(alias="requestId", description="Только задачи для указанного вопроса")
    ] = None,
):
    data = await homework_service.list_homework_jobs(ctx, request_id=request_id)
    return {"success": True, "data": data}
