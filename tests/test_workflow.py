import asyncio

import pytest

from schoolforms import (
    FormClosedError,
    FormError,
    FormState,
    SubmissionInProgressError,
    SubmissionResult,
    UploadError,
    UploadPendingError,
)
from schoolforms.forms import AnnouncementForm, AssignmentForm, EventForm, ResultForm

from samples import ANNOUNCEMENT, ASSIGNMENT, EVENT, RECORDS, RESULT


@pytest.mark.asyncio
async def test_create_success_notifies_closes_and_refreshes(host):
    workflow = host.workflow(AnnouncementForm)
    result = await workflow.submit(ANNOUNCEMENT)

    assert result.success is True
    assert host.submitted[0][0] == "create"
    assert host.events == [
        ("notify", "Announcement has been created!"),
        ("close",),
        ("refresh",),
    ]
    assert workflow.state is FormState.CLOSED


@pytest.mark.asyncio
async def test_update_calls_the_update_action(host):
    _, record = RECORDS[5]
    workflow = host.workflow(ResultForm, "update", record)
    result = await workflow.submit(workflow.initial_input())

    assert result.success is True
    assert host.submitted == [("update", record)]
    assert host.events[0] == ("notify", "Result has been updated!")


@pytest.mark.asyncio
async def test_failed_submission_keeps_the_form_open(host):
    host.outcome = {"success": False, "error": "Not implemented yet"}
    workflow = host.workflow(EventForm)
    result = await workflow.submit(EVENT)

    assert result == SubmissionResult(success=False, error="Not implemented yet")
    assert workflow.error == "Not implemented yet"
    assert workflow.state is FormState.IDLE
    assert workflow.can_submit
    assert host.events == []

    # the user can try again straight away
    host.outcome = {"success": True}
    result = await workflow.submit(EVENT)
    assert result.success is True
    assert workflow.error is None


@pytest.mark.asyncio
async def test_invalid_input_returns_errors_without_submitting(host):
    workflow = host.workflow(ResultForm)
    result = await workflow.submit({**RESULT, "exam_id": "", "assignment_id": ""})

    assert result.success is False
    assert result.errors == {"exam_id": "Either Exam or Assignment must be selected"}
    assert host.submitted == []
    assert workflow.state is FormState.IDLE


@pytest.mark.asyncio
async def test_plain_function_actions_are_supported(host):
    calls = []

    def create(data):
        calls.append(data)
        return SubmissionResult(success=True)

    workflow = host.workflow(AnnouncementForm, on_create=create)
    result = await workflow.submit(ANNOUNCEMENT)
    assert result.success is True
    assert calls[0]["author_id"] == "t1"


@pytest.mark.asyncio
async def test_action_exception_becomes_a_failure(host):
    async def create(data):
        raise RuntimeError("database is down")

    workflow = host.workflow(EventForm, on_create=create)
    result = await workflow.submit(EVENT)

    assert result.success is False
    assert result.error == "Could not create the event due to a server error."
    assert workflow.state is FormState.IDLE
    assert host.events == []


def test_state_starts_without_an_error(host):
    workflow = host.workflow(AssignmentForm)
    assert workflow.state is FormState.IDLE
    assert workflow.error is None
    assert workflow.errors == {}


def test_update_needs_a_record(host):
    with pytest.raises(FormError):
        host.workflow(AnnouncementForm, "update")


# -----------------------------
# Concurrency
# -----------------------------
@pytest.mark.asyncio
async def test_second_submit_while_pending_is_refused(host):
    gate = asyncio.Event()

    async def create(data):
        await gate.wait()
        return {"success": True}

    workflow = host.workflow(AnnouncementForm, on_create=create)
    pending = asyncio.create_task(workflow.submit(ANNOUNCEMENT))
    await asyncio.sleep(0)

    assert workflow.state is FormState.SUBMITTING
    assert not workflow.can_submit
    with pytest.raises(SubmissionInProgressError):
        await workflow.submit(ANNOUNCEMENT)

    gate.set()
    result = await pending
    assert result.success is True
    assert len([e for e in host.events if e[0] == "notify"]) == 1


@pytest.mark.asyncio
async def test_result_after_close_is_discarded(host):
    gate = asyncio.Event()

    async def create(data):
        await gate.wait()
        return {"success": True}

    workflow = host.workflow(AnnouncementForm, on_create=create)
    pending = asyncio.create_task(workflow.submit(ANNOUNCEMENT))
    await asyncio.sleep(0)

    workflow.close()
    gate.set()
    result = await pending

    assert result.success is True
    assert host.events == []
    assert workflow.closed


@pytest.mark.asyncio
async def test_closed_form_cannot_submit(host):
    workflow = host.workflow(AnnouncementForm)
    await workflow.submit(ANNOUNCEMENT)
    with pytest.raises(FormClosedError):
        await workflow.submit(ANNOUNCEMENT)


# -----------------------------
# Attachments
# -----------------------------
@pytest.mark.asyncio
async def test_submit_waits_for_the_upload(host):
    gate = asyncio.Event()

    async def upload():
        await gate.wait()
        return "https://files.example/essay.pdf"

    workflow = host.workflow(AssignmentForm)
    uploading = asyncio.create_task(workflow.attach("file_url", upload()))
    await asyncio.sleep(0)

    assert not workflow.can_submit
    with pytest.raises(UploadPendingError):
        await workflow.submit(ASSIGNMENT)
    assert host.submitted == []

    gate.set()
    assert await uploading == "https://files.example/essay.pdf"
    result = await workflow.submit(ASSIGNMENT)

    assert result.success is True
    assert host.submitted[0][1]["file_url"] == "https://files.example/essay.pdf"


@pytest.mark.asyncio
async def test_submit_without_upload_sends_no_locator(host):
    workflow = host.workflow(EventForm)
    await workflow.submit(EVENT)
    assert host.submitted[0][1]["img_url"] is None


@pytest.mark.asyncio
async def test_update_keeps_the_stored_locator_unless_replaced(host):
    _, record = RECORDS[1]
    workflow = host.workflow(AssignmentForm, "update", record)
    workflow.use_upload("file_url", "")
    await workflow.submit(workflow.initial_input())
    assert host.submitted[0][1]["file_url"] == "https://files.example/essay.pdf"


@pytest.mark.asyncio
async def test_failed_upload_is_reported_and_unblocks_submit(host):
    async def upload():
        raise ConnectionError("storage unreachable")

    workflow = host.workflow(AssignmentForm)
    with pytest.raises(UploadError):
        await workflow.attach("file_url", upload())

    assert workflow.can_submit
    result = await workflow.submit(ASSIGNMENT)
    assert result.success is True
    assert host.submitted[0][1]["file_url"] is None


def test_unknown_attachment_is_rejected(host):
    workflow = host.workflow(AnnouncementForm)
    with pytest.raises(FormError):
        workflow.use_upload("file_url", "https://files.example/x.pdf")


@pytest.mark.asyncio
async def test_overlapping_uploads_block_until_the_last_one_finishes(host):
    first_gate, second_gate = asyncio.Event(), asyncio.Event()

    async def upload(gate, locator):
        await gate.wait()
        return locator

    workflow = host.workflow(AssignmentForm)
    first = asyncio.create_task(workflow.attach("file_url", upload(first_gate, "https://files.example/draft.pdf")))
    second = asyncio.create_task(workflow.attach("file_url", upload(second_gate, "https://files.example/final.pdf")))
    await asyncio.sleep(0)

    first_gate.set()
    await first
    assert not workflow.can_submit
    with pytest.raises(UploadPendingError):
        await workflow.submit(ASSIGNMENT)

    second_gate.set()
    await second
    assert workflow.can_submit
    await workflow.submit(ASSIGNMENT)
    assert host.submitted[0][1]["file_url"] == "https://files.example/final.pdf"


@pytest.mark.asyncio
async def test_latest_upload_wins_even_when_it_finishes_first(host):
    first_gate, second_gate = asyncio.Event(), asyncio.Event()

    async def upload(gate, locator):
        await gate.wait()
        return locator

    workflow = host.workflow(AssignmentForm)
    first = asyncio.create_task(workflow.attach("file_url", upload(first_gate, "https://files.example/draft.pdf")))
    second = asyncio.create_task(workflow.attach("file_url", upload(second_gate, "https://files.example/final.pdf")))
    await asyncio.sleep(0)

    second_gate.set()
    await second
    first_gate.set()
    await first

    assert workflow.attachments["file_url"] == "https://files.example/final.pdf"


# -----------------------------
# Action results
# -----------------------------
@pytest.mark.asyncio
async def test_false_error_flag_counts_as_no_error(host):
    host.outcome = {"success": True, "error": False}
    workflow = host.workflow(EventForm)
    result = await workflow.submit(EVENT)

    assert result == SubmissionResult(success=True)
    assert len(host.submitted) == 1
    assert host.events == [("notify", "Event has been created!"), ("close",), ("refresh",)]


@pytest.mark.asyncio
async def test_unreadable_action_result_is_raised(host):
    host.outcome = None
    workflow = host.workflow(EventForm)
    with pytest.raises(FormError):
        await workflow.submit(EVENT)
    assert len(host.submitted) == 1
    assert host.events == []


def test_string_record_id_is_read_as_a_number(host):
    _, record = RECORDS[0]
    workflow = host.workflow(AnnouncementForm, "update", {**record, "id": "7"})
    assert workflow.record_id == 7
    assert workflow.validate(workflow.initial_input()) == {}
    assert workflow.cleaned_data()["id"] == 7


def test_non_numeric_record_id_is_rejected(host):
    _, record = RECORDS[0]
    with pytest.raises(FormError):
        host.workflow(AnnouncementForm, "update", {**record, "id": "seven"})
