"""HTTP surface: envelopes, auth guards and the job -> bid -> rating flow."""

from app.dependencies.pagination import page_params
from app.schemas.common import Pagination

from conftest import register

JOB_PAYLOAD = {
    "title": "Build a marketing site",
    "description": "A five page marketing site with a contact form and blog.",
    "category": "development",
    "budget": {"min": 400, "max": 900},
    "duration": "2-4 weeks",
    "skills_required": ["HTML", "CSS"],
}


async def _post_job(api, **overrides) -> dict:
    response = await api.post("/api/v1/jobs", json={**JOB_PAYLOAD, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_pagination_math():
    page = Pagination.build(page=2, limit=10, total=25)

    assert page.total_pages == 3
    assert page.has_next is True
    assert page.has_prev is True
    assert Pagination.build(page=1, limit=10, total=0).total_pages == 0


def test_page_size_is_capped():
    assert page_params(page=1, limit=500).limit == 50
    assert page_params(page=1, limit=None).limit == 10
    assert page_params(page=3, limit=20).limit == 20


class TestAuthGuards:
    async def test_unauthenticated_writes_are_rejected(self, api):
        assert (await api.post("/api/v1/jobs", json=JOB_PAYLOAD)).status_code == 401

        response = await api.post("/api/v1/jobs/00000000-0000-0000-0000-000000000000/claim")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Login required"}

    async def test_freelancer_cannot_post_job(self, api):
        await register(api, "Fred Freelancer", "freelancer")

        response = await api.post("/api/v1/jobs", json=JOB_PAYLOAD)

        assert response.status_code == 403

    async def test_unknown_job_is_404(self, api):
        response = await api.get("/api/v1/jobs/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Job not found"}


class TestJobEndpoints:
    async def test_create_and_list(self, api):
        await register(api, "Clara Client", "client")
        job = await _post_job(api)
        await _post_job(api, title="Cheap logo design", category="design", budget={"max": 50})

        assert job["status"] == "open"
        assert job["budget"] == {"min": 400.0, "max": 900.0}

        response = await api.get("/api/v1/jobs", params={"min_budget": 100})
        body = response.json()
        assert body["success"] is True
        assert [j["title"] for j in body["data"]["jobs"]] == ["Build a marketing site"]
        assert body["data"]["jobs"][0]["client"]["name"] == "Clara Client"
        assert body["data"]["pagination"] == {
            "current_page": 1,
            "total_pages": 1,
            "total": 1,
            "has_next": False,
            "has_prev": False,
        }

    async def test_invalid_job_payload(self, api):
        await register(api, "Clara Client", "client")

        response = await api.post("/api/v1/jobs", json={**JOB_PAYLOAD, "title": "abc", "category": "cooking"})

        assert response.status_code == 422
        fields = {error["field"] for error in response.json()["errors"]}
        assert {"title", "category"} <= fields

    async def test_null_skills_update_is_a_validation_error(self, api):
        await register(api, "Clara Client", "client")
        job = await _post_job(api)

        response = await api.put(f"/api/v1/jobs/{job['id']}", json={"skills_required": None})

        assert response.status_code == 422
        assert response.json()["success"] is False
        detail = (await api.get(f"/api/v1/jobs/{job['id']}")).json()["data"]
        assert detail["skills_required"] == ["HTML", "CSS"]

    async def test_padded_short_title_is_rejected(self, api):
        await register(api, "Clara Client", "client")

        response = await api.post("/api/v1/jobs", json={**JOB_PAYLOAD, "title": "  ab       "})
        assert response.status_code == 422
        assert "title" in {error["field"] for error in response.json()["errors"]}

        job = await _post_job(api, title="   Logo refresh   ")
        assert job["title"] == "Logo refresh"

        response = await api.put(f"/api/v1/jobs/{job['id']}", json={"title": " xy "})
        assert response.status_code == 422

    async def test_update_and_delete(self, api):
        await register(api, "Clara Client", "client")
        job = await _post_job(api)

        response = await api.put(f"/api/v1/jobs/{job['id']}", json={"title": "Build a landing site"})
        assert response.status_code == 200
        assert response.json()["data"]["title"] == "Build a landing site"

        response = await api.delete(f"/api/v1/jobs/{job['id']}")
        assert response.status_code == 200
        assert response.json()["success"] is True

        assert (await api.get(f"/api/v1/jobs/{job['id']}")).status_code == 404


class TestMarketplaceFlow:
    async def test_bid_accept_complete_rate(self, api):
        client = await register(api, "Clara Client", "client")
        job = await _post_job(api)
        await api.post("/api/v1/auth/logout")

        freelancer = await register(api, "Frank Freelancer", "freelancer")
        response = await api.post(
            f"/api/v1/jobs/{job['id']}/bids",
            json={"amount": 750, "duration": "2-4 weeks", "message": "Happy to help."},
        )
        assert response.status_code == 201
        bid = response.json()["data"]

        duplicate = await api.post(
            f"/api/v1/jobs/{job['id']}/bids", json={"amount": 700, "duration": "2-4 weeks"}
        )
        assert duplicate.status_code == 409

        mine = await api.get("/api/v1/bids/mine")
        assert mine.json()["data"]["pagination"]["total"] == 1
        await api.post("/api/v1/auth/logout")

        await api.post("/api/v1/auth/login", json={"email": "clara.client@example.com", "password": "password123"})
        unread = await api.get("/api/v1/notifications/unread-count")
        assert unread.json()["data"]["count"] == 1

        response = await api.put(f"/api/v1/bids/{bid['id']}", json={"status": "accepted"})
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "accepted"

        detail = (await api.get(f"/api/v1/jobs/{job['id']}")).json()["data"]
        assert detail["status"] == "in_progress"
        assert detail["freelancer"]["id"] == freelancer["id"]
        assert detail["bid_count"] == 1
        assert detail["bids"][0]["freelancer"]["name"] == "Frank Freelancer"

        assert (await api.post(f"/api/v1/jobs/{job['id']}/complete")).status_code == 200

        response = await api.post(f"/api/v1/jobs/{job['id']}/rating", json={"rating": 5, "feedback": "Great"})
        assert response.status_code == 201
        again = await api.post(f"/api/v1/jobs/{job['id']}/rating", json={"rating": 4})
        assert again.status_code == 409

        profile = (await api.get(f"/api/v1/users/{freelancer['id']}")).json()["data"]
        assert profile["rating"] == {"average": 5.0, "count": 1}

        ratings = (await api.get(f"/api/v1/users/{freelancer['id']}/ratings")).json()["data"]
        assert ratings["ratings"][0]["client_id"] == client["id"]

    async def test_second_claim_is_rejected(self, api):
        await register(api, "Clara Client", "client")
        job = await _post_job(api)
        await api.post("/api/v1/auth/logout")

        await register(api, "Frank Freelancer", "freelancer")
        assert (await api.post(f"/api/v1/jobs/{job['id']}/claim")).status_code == 200
        await api.post("/api/v1/auth/logout")

        await register(api, "Gina Late", "freelancer")
        response = await api.post(f"/api/v1/jobs/{job['id']}/claim")

        assert response.status_code == 400
        assert response.json()["message"] == "Job is not available for claiming"

    async def test_notification_feed(self, api):
        await register(api, "Clara Client", "client")
        job = await _post_job(api)
        await api.post("/api/v1/auth/logout")
        await register(api, "Frank Freelancer", "freelancer")
        await api.post(f"/api/v1/jobs/{job['id']}/claim")
        await api.post("/api/v1/auth/logout")

        await api.post("/api/v1/auth/login", json={"email": "clara.client@example.com", "password": "password123"})
        feed = (await api.get("/api/v1/notifications")).json()["data"]
        assert feed["unread_count"] == 1
        [notification] = feed["notifications"]
        assert notification["title"] == "Job Claimed"

        response = await api.put(f"/api/v1/notifications/{notification['id']}/read")
        assert response.json()["data"]["is_read"] is True

        marked = (await api.put("/api/v1/notifications/read-all")).json()["data"]
        assert marked["updated"] == 0

        assert (await api.delete(f"/api/v1/notifications/{notification['id']}")).status_code == 200
        feed = (await api.get("/api/v1/notifications")).json()["data"]
        assert feed["notifications"] == []
