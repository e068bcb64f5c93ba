"""Job lifecycle: posting, editing, deleting, claiming and finishing."""

import uuid

import pytest
from sqlalchemy import select

from app.exceptions import (
    AlreadyClaimedError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from app.models.bid import Bid
from app.models.job import Job, can_transition
from app.models.notification import Notification
from app.schemas.job import JobCreate, JobUpdate
from app.services import job_service

from conftest import make_job


def test_transition_table():
    assert can_transition("open", "in_progress")
    assert can_transition("in_progress", "completed")
    assert can_transition("in_progress", "cancelled")
    assert not can_transition("open", "completed")
    assert not can_transition("completed", "open")
    assert not can_transition("cancelled", "in_progress")


class TestCreateJob:
    async def test_new_job_is_open_and_unassigned(self, db, client_user):
        payload = JobCreate(
            title="  Build a REST API  ",
            description="Design and implement a small REST API for our inventory.",
            category="development",
            budget={"min": 500, "max": 1000},
            duration="2-4 weeks",
            skills_required=[" Python ", "", "FastAPI"],
            attachments=[{"filename": "brief.pdf", "url": "https://files.example.com/brief.pdf"}],
        )

        job = await job_service.create_job(db, client_user, payload)

        assert job.status == "open"
        assert job.freelancer_id is None
        assert job.client_id == client_user.id
        assert job.title == "Build a REST API"
        assert job.skills_required == ["Python", "FastAPI"]
        assert job.budget == {"min": 500, "max": 1000}
        assert job.attachments == [{"filename": "brief.pdf", "url": "https://files.example.com/brief.pdf"}]
        assert job.created_at is not None


class TestUpdateJob:
    async def test_owner_updates_open_job(self, db, client_user, open_job):
        job = await job_service.update_job(
            db, open_job.id, client_user, JobUpdate(title="Landing page refresh", budget={"max": 800})
        )

        assert job.title == "Landing page refresh"
        assert job.budget == {"min": None, "max": 800}
        assert job.description == "Redesign our product landing page with a modern look."

    async def test_non_owner_is_forbidden(self, db, other_client, open_job):
        with pytest.raises(ForbiddenError):
            await job_service.update_job(db, open_job.id, other_client, JobUpdate(title="Hijacked title"))

    async def test_missing_job_is_not_found(self, db, client_user):
        with pytest.raises(NotFoundError):
            await job_service.update_job(db, uuid.uuid4(), client_user, JobUpdate(title="Nothing here"))

    async def test_update_after_claim_is_rejected(self, db, client_user, freelancer, open_job):
        await job_service.claim_job(db, open_job.id, freelancer)
        await db.commit()

        with pytest.raises(InvalidStateError, match="not open"):
            await job_service.update_job(db, open_job.id, client_user, JobUpdate(title="Too late now"))

    def test_empty_update_is_invalid(self):
        with pytest.raises(ValueError):
            JobUpdate()


class TestDeleteJob:
    async def test_owner_deletes_open_job_without_bids(self, db, client_user, open_job):
        job_id = open_job.id

        await job_service.delete_job(db, job_id, client_user)
        await db.commit()

        assert await db.get(Job, job_id) is None

    async def test_job_with_bids_cannot_be_deleted(self, db, client_user, freelancer, open_job):
        db.add(Bid(job_id=open_job.id, freelancer_id=freelancer.id, amount=300, duration="1-2 weeks"))
        await db.commit()

        with pytest.raises(InvalidStateError, match="bids or in progress"):
            await job_service.delete_job(db, open_job.id, client_user)

    async def test_in_progress_job_cannot_be_deleted(self, db, client_user, freelancer, open_job):
        await job_service.claim_job(db, open_job.id, freelancer)
        await db.commit()

        with pytest.raises(InvalidStateError):
            await job_service.delete_job(db, open_job.id, client_user)

    async def test_non_owner_cannot_delete(self, db, other_client, open_job):
        with pytest.raises(ForbiddenError):
            await job_service.delete_job(db, open_job.id, other_client)


class TestClaimJob:
    async def test_claim_assigns_freelancer(self, db, client_user, freelancer, open_job):
        job = await job_service.claim_job(db, open_job.id, freelancer)
        await db.commit()

        assert job.status == "in_progress"
        assert job.freelancer_id == freelancer.id

        result = await db.execute(select(Notification).where(Notification.user_id == client_user.id))
        notification = result.scalar_one()
        assert notification.title == "Job Claimed"
        assert notification.related_job_id == open_job.id
        assert "Fiona Freelancer" in notification.message

    async def test_client_cannot_claim(self, db, other_client, open_job):
        with pytest.raises(ForbiddenError, match="Only freelancers"):
            await job_service.claim_job(db, open_job.id, other_client)

    async def test_missing_job_checked_before_role(self, db, other_client):
        with pytest.raises(NotFoundError):
            await job_service.claim_job(db, uuid.uuid4(), other_client)

    async def test_second_claim_fails(self, db, freelancer, second_freelancer, open_job):
        await job_service.claim_job(db, open_job.id, freelancer)
        await db.commit()

        with pytest.raises(InvalidStateError):
            await job_service.claim_job(db, open_job.id, second_freelancer)

    async def test_completed_job_cannot_be_claimed(self, db, client_user, freelancer, second_freelancer):
        job = await make_job(db, client_user, status="completed", freelancer_id=freelancer.id)

        with pytest.raises(InvalidStateError, match="not available"):
            await job_service.claim_job(db, job.id, second_freelancer)

    async def test_concurrent_claims_have_one_winner(
        self, session_factory, freelancer, second_freelancer, open_job
    ):
        async with session_factory() as first, session_factory() as second:
            # The loser reads the job while it is still open
            stale = await job_service.get_job(second, open_job.id)
            assert stale.status == "open"

            await job_service.claim_job(first, open_job.id, freelancer)
            await first.commit()

            with pytest.raises(AlreadyClaimedError):
                await job_service.claim_job(second, open_job.id, second_freelancer)
            await second.rollback()

        async with session_factory() as check:
            job = await check.get(Job, open_job.id)
            assert job.status == "in_progress"
            assert job.freelancer_id == freelancer.id


class TestFinishJob:
    async def test_owner_completes_in_progress_job(self, db, client_user, freelancer, open_job):
        await job_service.claim_job(db, open_job.id, freelancer)

        job = await job_service.complete_job(db, open_job.id, client_user)
        await db.commit()

        assert job.status == "completed"
        result = await db.execute(
            select(Notification).where(
                Notification.user_id == freelancer.id, Notification.title == "Job Completed"
            )
        )
        assert result.scalar_one().related_job_id == open_job.id

    async def test_open_job_cannot_be_completed(self, db, client_user, open_job):
        with pytest.raises(InvalidStateError):
            await job_service.complete_job(db, open_job.id, client_user)

    async def test_owner_cancels_in_progress_job(self, db, client_user, freelancer, open_job):
        await job_service.claim_job(db, open_job.id, freelancer)

        job = await job_service.cancel_job(db, open_job.id, client_user)

        assert job.status == "cancelled"

    async def test_terminal_states_are_final(self, db, client_user, freelancer, open_job):
        await job_service.claim_job(db, open_job.id, freelancer)
        await job_service.complete_job(db, open_job.id, client_user)

        with pytest.raises(InvalidStateError):
            await job_service.cancel_job(db, open_job.id, client_user)

    async def test_freelancer_cannot_complete(self, db, freelancer, open_job):
        await job_service.claim_job(db, open_job.id, freelancer)

        with pytest.raises(ForbiddenError):
            await job_service.complete_job(db, open_job.id, freelancer)


class TestListJobs:
    async def test_filters_and_count(self, db, client_user):
        await make_job(db, client_user, title="Cheap logo", budget_max=100.0)
        await make_job(db, client_user, title="Mid logo", budget_max=500.0)
        await make_job(db, client_user, title="Big app", category="development", budget_max=5000.0)
        await make_job(db, client_user, title="No budget", budget_min=None, budget_max=None)

        jobs, total = await job_service.list_jobs(db, page=1, limit=10, min_budget=100, max_budget=500)
        assert total == 2
        assert {job.title for job in jobs} == {"Cheap logo", "Mid logo"}

        jobs, total = await job_service.list_jobs(db, page=1, limit=10, category="development")
        assert total == 1
        assert jobs[0].title == "Big app"
        assert jobs[0].client.id == client_user.id
        assert jobs[0].bid_count == 0

    async def test_status_filter(self, db, client_user, freelancer):
        await make_job(db, client_user, title="Still open")
        await make_job(db, client_user, title="Already taken", status="in_progress", freelancer_id=freelancer.id)

        jobs, total = await job_service.list_jobs(db, page=1, limit=10, status="open")

        assert total == 1
        assert jobs[0].title == "Still open"

    async def test_search_matches_title_description_and_skills(self, db, client_user):
        await make_job(db, client_user, title="Mobile app", skills_required=["Flutter"])
        await make_job(db, client_user, title="Copywriting gig", description="Write 100% original copy for our blog posts.")
        await make_job(db, client_user, title="Unrelated work")

        jobs, _ = await job_service.list_jobs(db, page=1, limit=10, search="flutter")
        assert [job.title for job in jobs] == ["Mobile app"]

        jobs, _ = await job_service.list_jobs(db, page=1, limit=10, search="original copy")
        assert [job.title for job in jobs] == ["Copywriting gig"]

        # LIKE wildcards are matched literally
        jobs, _ = await job_service.list_jobs(db, page=1, limit=10, search="100%")
        assert [job.title for job in jobs] == ["Copywriting gig"]

    async def test_pagination_slices_results(self, db, client_user):
        for i in range(5):
            await make_job(db, client_user, title=f"Job number {i}")

        first, total = await job_service.list_jobs(db, page=1, limit=2)
        third, _ = await job_service.list_jobs(db, page=3, limit=2)

        assert total == 5
        assert len(first) == 2
        assert len(third) == 1

    async def test_user_jobs_cover_both_roles(self, db, client_user, freelancer):
        posted = await make_job(db, client_user, title="Posted by client")
        await make_job(db, client_user, title="Other open job")
        await job_service.claim_job(db, posted.id, freelancer)
        await db.commit()

        jobs, total = await job_service.list_user_jobs(db, client_user, page=1, limit=10)
        assert total == 2

        jobs, total = await job_service.list_user_jobs(db, freelancer, page=1, limit=10)
        assert total == 1
        assert jobs[0].id == posted.id


class TestJobDetail:
    async def test_detail_loads_relations(self, db, client_user, freelancer, open_job):
        db.add(Bid(job_id=open_job.id, freelancer_id=freelancer.id, amount=300, duration="1-2 weeks"))
        await db.commit()

        job = await job_service.get_job_detail(db, open_job.id)

        assert job.client.name == "Carol Client"
        assert job.freelancer is None
        assert job.bid_count == 1
        assert job.bids[0].freelancer.name == "Fiona Freelancer"

    async def test_missing_job(self, db):
        with pytest.raises(NotFoundError):
            await job_service.get_job_detail(db, uuid.uuid4())
