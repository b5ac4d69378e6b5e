"""Service-level tests: handlers called directly with an explicit ActionContext."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from homework_helper.core.exceptions import NotFound, Unauthorized
from homework_helper.models.homework import (
    HomeworkRequest,
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
from homework_helper.services import homework as service

pytestmark = pytest.mark.anyio


async def _create_request(ctx, **fields) -> HomeworkRequest:
    payload = HomeworkRequestCreate.model_validate({"questionText": "Solve 3x + 2 = 11", **fields})
    return (await service.create_homework_request(ctx, payload))["request"]


async def test_every_handler_rejects_anonymous_context(make_context):
    anonymous = make_context(None)
    calls = [
        service.create_homework_request(anonymous, HomeworkRequestCreate(question_text="q")),
        service.update_homework_request(anonymous, 1, HomeworkRequestUpdate(title="t")),
        service.list_homework_requests(anonymous),
        service.add_homework_response(anonymous, 1, HomeworkResponseCreate(answer_text="a")),
        service.update_homework_response(anonymous, 1, 1, HomeworkResponseUpdate(rating=3)),
        service.list_homework_responses(anonymous, 1),
        service.create_homework_job(anonymous, HomeworkJobCreate()),
        service.list_homework_jobs(anonymous),
    ]
    for call in calls:
        with pytest.raises(Unauthorized):
            await call


async def test_create_request_sets_open_status_and_equal_timestamps(make_context):
    request = await _create_request(make_context(), subject="Math", attachments={"images": ["a.png"]})

    assert request.id is not None
    assert request.user_id == "student-a"
    assert request.status is RequestStatus.OPEN
    assert request.created_at == request.updated_at
    assert request.attachments == {"images": ["a.png"]}


async def test_update_request_changes_only_supplied_fields(make_context, monkeypatch):
    ctx = make_context()
    request = await _create_request(ctx, subject="Math", topic="Linear equations")
    later = datetime.now(timezone.utc) + timedelta(hours=1)
    monkeypatch.setattr(service, "utcnow", lambda: later)

    updated = (await service.update_homework_request(ctx, request.id, HomeworkRequestUpdate(title="Homework 4")))["request"]

    assert updated.title == "Homework 4"
    assert updated.subject == "Math"
    assert updated.topic == "Linear equations"
    assert updated.question_text == "Solve 3x + 2 = 11"
    assert updated.updated_at > updated.created_at


async def test_get_owned_request_hides_foreign_rows(make_context):
    request = await _create_request(make_context("student-a"))

    with pytest.raises(NotFound) as foreign:
        await service.get_owned_request(make_context("student-b"), request.id, "student-b")
    with pytest.raises(NotFound) as missing:
        await service.get_owned_request(make_context("student-b"), 9999, "student-b")

    assert foreign.value.message == missing.value.message == "Homework request not found."


async def test_add_accepted_response_marks_request_answered(make_context):
    ctx = make_context()
    request = await _create_request(ctx)

    response = (await service.add_homework_response(
        ctx, request.id, HomeworkResponseCreate(answer_text="x = 3", is_accepted=True)
    ))["response"]

    assert response.is_accepted is True
    assert response.source is ResponseSource.AI
    assert response.user_id == "student-a"
    assert request.status is RequestStatus.ANSWERED


async def test_unaccepting_reverts_request_even_if_another_response_is_accepted(make_context):
    ctx = make_context()
    request = await _create_request(ctx)
    first = (await service.add_homework_response(ctx, request.id, HomeworkResponseCreate(answer_text="x = 3", is_accepted=True)))["response"]
    second = (await service.add_homework_response(ctx, request.id, HomeworkResponseCreate(answer_text="x equals 3", is_accepted=True)))["response"]

    await service.update_homework_response(ctx, request.id, second.id, HomeworkResponseUpdate(is_accepted=False))

    refreshed = await service.get_owned_request(ctx, request.id, "student-a")
    assert first.is_accepted is True
    assert refreshed.status is RequestStatus.OPEN


async def test_update_response_without_acceptance_leaves_request_status(make_context):
    ctx = make_context()
    request = await _create_request(ctx)
    response = (await service.add_homework_response(ctx, request.id, HomeworkResponseCreate(answer_text="x = 3")))["response"]
    updated_at_before = request.updated_at

    updated = (await service.update_homework_response(
        ctx, request.id, response.id, HomeworkResponseUpdate(rating=4, feedback="Clear")
    ))["response"]

    assert updated.rating == 4
    assert updated.feedback == "Clear"
    assert updated.is_accepted is False
    assert request.status is RequestStatus.OPEN
    assert request.updated_at == updated_at_before


async def test_update_response_under_other_request_is_not_found(make_context):
    ctx = make_context()
    first_request = await _create_request(ctx)
    second_request = await _create_request(ctx, title="Another")
    response = (await service.add_homework_response(ctx, first_request.id, HomeworkResponseCreate(answer_text="x = 3")))["response"]

    with pytest.raises(NotFound) as exc_info:
        await service.update_homework_response(ctx, second_request.id, response.id, HomeworkResponseUpdate(is_accepted=True))

    assert exc_info.value.message == "Response not found."
    assert second_request.status is RequestStatus.OPEN


async def test_create_job_defaults_and_ownership(make_context):
    ctx = make_context()
    request = await _create_request(ctx)

    job = (await service.create_homework_job(ctx, HomeworkJobCreate(request_id=request.id)))["job"]
    assert job.job_type is JobType.FULL_SOLUTION
    assert job.status is JobStatus.COMPLETED
    assert job.user_id == "student-a"

    with pytest.raises(NotFound):
        await service.create_homework_job(make_context("student-b"), HomeworkJobCreate(request_id=request.id))


async def test_list_jobs_filters_by_request(make_context):
    ctx = make_context()
    request = await _create_request(ctx)
    await service.create_homework_job(ctx, HomeworkJobCreate(request_id=request.id, job_type=JobType.HINT_ONLY))
    await service.create_homework_job(ctx, HomeworkJobCreate())

    everything = await service.list_homework_jobs(ctx)
    linked = await service.list_homework_jobs(ctx, request_id=request.id)

    assert everything["total"] == 2
    assert linked["total"] == 1
    assert linked["items"][0].job_type is JobType.HINT_ONLY
