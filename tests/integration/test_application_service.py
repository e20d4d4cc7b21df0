"""Integration tests for the application service against SQLite."""

import pytest

from hiretrack.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from hiretrack.schemas.application import ApplicationUpdate, DocumentMeta, UploadOutcome
from hiretrack.services.application_service import ApplicationService
from hiretrack.services.lifecycle import STRICT_TRANSITIONS


@pytest.mark.usefixtures("db")
class TestApplicationServiceIntegration:
    """Test application persistence and lifecycle writes."""

    @pytest.fixture
    def service(self):
        return ApplicationService()

    @pytest.mark.asyncio
    async def test_create_and_get(self, service, applicant_input):
        created = await service.create(applicant_input)

        assert created.id
        assert created.status == "pending"

        fetched = await service.get(created.id)
        assert fetched == created
        assert fetched.documents.resume.status == "pending_upload"

    @pytest.mark.asyncio
    async def test_get_missing(self, service):
        with pytest.raises(NotFoundError):
            await service.get("does-not-exist")

    @pytest.mark.asyncio
    async def test_create_rejects_invalid_input(self, service, applicant_input):
        data = applicant_input.model_copy(update={"first_name": ""})

        with pytest.raises(ValidationError):
            await service.create(data)

        assert await service.list_all() == []

    @pytest.mark.asyncio
    async def test_list_newest_first(self, service, applicant_input):
        for position in ["First", "Second", "Third"]:
            await service.create(applicant_input.model_copy(update={"position": position}))

        listed = await service.list_all()

        assert [a.position for a in listed] == ["Third", "Second", "First"]

    @pytest.mark.asyncio
    async def test_list_by_status_and_applicant(self, service, applicant_input):
        mine = await service.create(applicant_input, applicant_id="applicant-1")
        other = await service.create(applicant_input)
        await service.update_status(other.id, "reviewed", "Harriet")

        assert [a.id for a in await service.list_for_applicant("applicant-1")] == [mine.id]
        assert [a.id for a in await service.list_by_status("reviewed")] == [other.id]
        assert [a.id for a in await service.list_by_status("pending")] == [mine.id]

    @pytest.mark.asyncio
    async def test_sequential_status_updates_keep_every_entry(self, service, applicant_input):
        created = await service.create(applicant_input)

        await service.update_status(created.id, "reviewed", "Harriet", "Strong CV")
        await service.update_status(created.id, "interviewed", "Ivan")
        final = await service.update_status(created.id, "hired", "Harriet")

        stored = await service.get(created.id)
        assert stored == final
        assert stored.status == "hired"
        assert [e.changed_by for e in stored.status_history] == ["Harriet", "Ivan", "Harriet"]
        assert stored.notes == "Strong CV"

    @pytest.mark.asyncio
    async def test_update_status_missing(self, service):
        with pytest.raises(NotFoundError):
            await service.update_status("missing", "reviewed", "Harriet")

    @pytest.mark.asyncio
    async def test_strict_transitions_leave_record_unchanged(self, applicant_input):
        service = ApplicationService(transitions=STRICT_TRANSITIONS)
        created = await service.create(applicant_input)
        await service.update_status(created.id, "rejected", "Harriet")

        with pytest.raises(InvalidTransitionError):
            await service.update_status(created.id, "pending", "Harriet")

        stored = await service.get(created.id)
        assert stored.status == "rejected"
        assert len(stored.status_history) == 1

    @pytest.mark.asyncio
    async def test_update_edits_fields_only(self, service, applicant_input):
        created = await service.create(applicant_input)
        await service.update_status(created.id, "reviewed", "Harriet")

        updated = await service.update(
            created.id, ApplicationUpdate(phone="555-9999", skills=["Go"])
        )

        assert updated.phone == "555-9999"
        assert updated.skills == ["Go"]
        assert updated.status == "reviewed"
        assert len(updated.status_history) == 1
        assert (await service.get(created.id)).phone == "555-9999"

    @pytest.mark.asyncio
    async def test_document_bookkeeping(self, service, applicant_input):
        created = await service.create(applicant_input)

        await service.attach_document(
            created.id,
            "portfolio",
            DocumentMeta(name="site.pdf", size=12, mime_type="application/pdf"),
        )
        updated = await service.record_upload(
            created.id, "portfolio", UploadOutcome.uploaded("http://files/site.pdf")
        )

        assert updated.documents.portfolio.url == "http://files/site.pdf"
        assert updated.documents.resume.status == "pending_upload"
        assert updated.status == "pending"

    @pytest.mark.asyncio
    async def test_delete(self, service, applicant_input):
        created = await service.create(applicant_input)

        await service.delete(created.id)

        with pytest.raises(NotFoundError):
            await service.get(created.id)
        with pytest.raises(NotFoundError):
            await service.delete(created.id)
