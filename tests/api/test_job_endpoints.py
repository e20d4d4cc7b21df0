"""Test HR job management and the public board."""

from unittest.mock import AsyncMock, MagicMock

from hiretrack.core.exceptions import CollaboratorError
from hiretrack.services.dependencies import get_job_service


class TestJobEndpoints:
    """Test job management API endpoints."""

    def _create(self, client, headers, payload, **overrides):
        response = client.post("/jobs", json={**payload, **overrides}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    def test_create_job(self, client, hr_headers, job_payload):
        job = self._create(client, hr_headers, job_payload)

        assert job["id"]
        assert job["status"] == "active"
        assert job["salaryRange"] == "$100k - $130k"
        assert job["createdDate"]

    def test_create_ignores_client_status(self, client, hr_headers, job_payload):
        job = self._create(client, hr_headers, job_payload, status="closed")
        assert job["status"] == "active"

    def test_create_validation_error(self, client, hr_headers, job_payload):
        response = client.post(
            "/jobs", json={**job_payload, "type": "gig", "title": ""}, headers=hr_headers
        )

        assert response.status_code == 422
        assert response.json()["detail"]["fields"] == ["title"]

    def test_requires_staff(self, client, applicant_headers, job_payload):
        assert client.post("/jobs", json=job_payload).status_code == 401
        assert client.post("/jobs", json=job_payload, headers=applicant_headers).status_code == 403
        assert client.get("/jobs", headers=applicant_headers).status_code == 403

    def test_list_with_counts_and_filters(
        self, client, hr_headers, job_payload, applicant_payload
    ):
        backend = self._create(client, hr_headers, job_payload)
        designer = self._create(
            client, hr_headers, job_payload, title="Designer", department="Design"
        )
        client.post(f"/jobs/{designer['id']}/status", json={"status": "paused"}, headers=hr_headers)
        client.post("/applications", json=applicant_payload)

        response = client.get("/jobs", headers=hr_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["counts"] == {"all": 2, "active": 1, "paused": 1, "closed": 0}
        counts = {job["id"]: job["applicationCount"] for job in data["items"]}
        assert counts == {backend["id"]: 1, designer["id"]: 0}

        filtered = client.get(
            "/jobs", params={"status": "paused", "search": "design"}, headers=hr_headers
        ).json()
        assert [job["id"] for job in filtered["items"]] == [designer["id"]]
        assert filtered["counts"]["all"] == 2

    def test_get_update_delete(self, client, hr_headers, job_payload):
        job = self._create(client, hr_headers, job_payload)

        fetched = client.get(f"/jobs/{job['id']}", headers=hr_headers)
        assert fetched.json()["title"] == "Backend Engineer"

        updated = client.patch(
            f"/jobs/{job['id']}",
            json={"title": "Platform Engineer", "benefits": ["Equity"]},
            headers=hr_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["title"] == "Platform Engineer"
        assert updated.json()["benefits"] == ["Equity"]
        assert updated.json()["requirements"] == ["Python", "SQL"]

        deleted = client.delete(f"/jobs/{job['id']}", headers=hr_headers)
        assert deleted.json() == {"deleted": True, "id": job["id"]}
        assert client.get(f"/jobs/{job['id']}", headers=hr_headers).status_code == 404

    def test_update_rejects_empty_field(self, client, hr_headers, job_payload):
        job = self._create(client, hr_headers, job_payload)

        response = client.patch(
            f"/jobs/{job['id']}", json={"location": ""}, headers=hr_headers
        )

        assert response.status_code == 422

    def test_status_change(self, client, hr_headers, job_payload):
        job = self._create(client, hr_headers, job_payload)

        closed = client.post(
            f"/jobs/{job['id']}/status", json={"status": "closed"}, headers=hr_headers
        )
        assert closed.json()["status"] == "closed"

        invalid = client.post(
            f"/jobs/{job['id']}/status", json={"status": "draft"}, headers=hr_headers
        )
        assert invalid.status_code == 422

    def test_missing_job(self, client, hr_headers):
        assert client.delete("/jobs/nope", headers=hr_headers).status_code == 404
        assert (
            client.post("/jobs/nope/status", json={"status": "closed"}, headers=hr_headers).status_code
            == 404
        )


class TestBoardEndpoints:
    """Test the public job board."""

    def test_board_lists_active_jobs_only(self, client, hr_headers, job_payload):
        open_job = client.post("/jobs", json=job_payload, headers=hr_headers).json()
        paused = client.post(
            "/jobs", json={**job_payload, "title": "Designer"}, headers=hr_headers
        ).json()
        client.post(f"/jobs/{paused['id']}/status", json={"status": "paused"}, headers=hr_headers)

        board = client.get("/board/jobs")

        assert board.status_code == 200
        assert [job["id"] for job in board.json()] == [open_job["id"]]
        assert client.get(f"/board/jobs/{open_job['id']}").status_code == 200
        assert client.get(f"/board/jobs/{paused['id']}").status_code == 404

    def test_board_filters_and_facets(self, client, hr_headers, job_payload):
        client.post("/jobs", json=job_payload, headers=hr_headers)
        client.post(
            "/jobs",
            json={**job_payload, "title": "Analyst", "department": "Data", "type": "contract"},
            headers=hr_headers,
        )

        by_type = client.get("/board/jobs", params={"type": "contract"}).json()
        assert [job["title"] for job in by_type] == ["Analyst"]

        by_search = client.get("/board/jobs", params={"search": "ENGINEER"}).json()
        assert [job["title"] for job in by_search] == ["Backend Engineer"]

        facets = client.get("/board/facets").json()
        assert sorted(facets["departments"]) == ["Data", "Engineering"]
        assert sorted(facets["types"]) == ["contract", "full-time"]

    def test_persistence_outage(self, client):
        failing = MagicMock()
        failing.list_public = AsyncMock(
            side_effect=CollaboratorError("persistence", "connection refused")
        )
        client.app.dependency_overrides[get_job_service] = lambda: failing

        response = client.get("/board/jobs")

        assert response.status_code == 502
        assert response.json()["detail"] == "persistence unavailable"
