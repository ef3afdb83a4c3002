"""End-to-end submit cycles through the real client and a mock transport."""

from __future__ import annotations

import asyncio

import pytest

from note_synth.core.config import AppSettings, OrchestrationConfig
from note_synth.models import ExportFormat, ExportSuccess, UploadedDocument, UseCase
from note_synth.services import DocumentIngestor, ResultSerializer, SubmissionService
from note_synth.services.document_ingestor import append_to_input
from tests.fakes.docx_factory import build_docx
from tests.fakes.fake_assistant_service import FakeAssistantService


class TestSubmissionCycle:
    @pytest.mark.asyncio
    async def test_upload_process_export(self, settings: AppSettings) -> None:
        ingested = DocumentIngestor().extract_text(
            UploadedDocument(filename="summary.docx", data=build_docx())
        )
        input_text = append_to_input("Context from clinician", ingested)

        service = FakeAssistantService(
            statuses=["queued", "queued", "in_progress", "completed"],
            replies=["SNOMED 80146002"],
        )
        result = await SubmissionService(settings, transport=service.transport).submit(
            input_text, UseCase.DISCHARGE
        )

        assert result.ok
        assert result.text == "SNOMED 80146002"
        assert service.run_polls == 3
        assert service.posted_messages[0]["content"].startswith("Context from clinician\n\nDischarge Summary")

        export = ResultSerializer().serialize(result.text, ExportFormat.DOCX)
        assert isinstance(export, ExportSuccess)

    @pytest.mark.asyncio
    async def test_each_submission_uses_fresh_thread(self, settings: AppSettings) -> None:
        service = FakeAssistantService(replies=["ok"])
        submitter = SubmissionService(settings, transport=service.transport)

        await submitter.submit("first", UseCase.REVIEW)
        await submitter.submit("second", UseCase.REVIEW)

        assert service.count("POST", "/threads") == 2
        assert [m["content"] for m in service.posted_messages] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_thread_failure_becomes_error_text(self, settings: AppSettings) -> None:
        service = FakeAssistantService(fail={"POST /threads": 500})
        result = await SubmissionService(settings, transport=service.transport).submit(
            "notes", UseCase.SUMMARY
        )

        assert not result.ok
        assert result.error_kind == "ThreadCreationFailed"
        assert result.text.startswith("Error: ")
        assert service.count("POST", "/messages") == 0

    @pytest.mark.asyncio
    async def test_empty_reply_sentinel(self, settings: AppSettings) -> None:
        service = FakeAssistantService(replies=[])
        result = await SubmissionService(settings, transport=service.transport).submit(
            "notes", UseCase.REVIEW
        )
        assert result.ok
        assert result.text == "No response content available"

    @pytest.mark.asyncio
    async def test_blank_input_raises(self, settings: AppSettings) -> None:
        with pytest.raises(ValueError):
            await SubmissionService(settings).submit("  ", UseCase.REVIEW)

    @pytest.mark.asyncio
    async def test_cancel_while_polling(self, settings: AppSettings) -> None:
        settings.orchestration = OrchestrationConfig(poll_interval_seconds=5.0)
        service = FakeAssistantService(statuses=["queued"])
        cancel = asyncio.Event()

        task = asyncio.create_task(
            SubmissionService(settings, transport=service.transport).submit(
                "notes", UseCase.REVIEW, cancel_event=cancel
            )
        )
        await asyncio.sleep(0.05)
        cancel.set()
        result = await asyncio.wait_for(task, timeout=2.0)

        assert not result.ok
        assert result.error_kind == "RunCancelled"
        assert service.run_polls == 0

    @pytest.mark.asyncio
    async def test_templates_listed_through_client(self, settings: AppSettings) -> None:
        service = FakeAssistantService(assistants=[("a1", "dev_A"), ("a2", "B")])
        templates = await SubmissionService(settings, transport=service.transport).list_templates()
        assert [t.id for t in templates] == ["a1"]
