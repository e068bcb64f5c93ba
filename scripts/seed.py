"""Seed sample marketplace data: one client, three freelancers, jobs, bids and a rating.

Existing rows are wiped first. Every account uses the password ``password123``.

Usage:
    docker compose exec backend python -m scripts.seed
"""

import uuid

from sqlalchemy import delete, func, select

from app.models.base import SyncSessionLocal
from app.models.bid import Bid
from app.models.job import Job
from app.models.notification import Notification
from app.models.rating import Rating
from app.models.user import User
from app.services.auth_service import hash_password

SAMPLE_PASSWORD = "password123"

USERS = [
    {
        "key": "john",
        "name": "John Client",
        "email": "john@example.com",
        "role": "client",
        "bio": "Startup founder looking for talented freelancers",
        "skills": [],
    },
    {
        "key": "sarah",
        "name": "Sarah Designer",
        "email": "sarah@example.com",
        "role": "freelancer",
        "bio": "Professional UI/UX designer with 5 years experience",
        "skills": ["UI Design", "UX Research", "Figma", "Adobe XD"],
    },
    {
        "key": "mike",
        "name": "Mike Developer",
        "email": "mike@example.com",
        "role": "freelancer",
        "bio": "Full-stack developer specializing in React and Node.js",
        "skills": ["React", "Node.js", "JavaScript", "PostgreSQL"],
    },
    {
        "key": "lisa",
        "name": "Lisa Writer",
        "email": "lisa@example.com",
        "role": "freelancer",
        "bio": "Content writer and copywriter with expertise in tech",
        "skills": ["Content Writing", "Copywriting", "SEO", "Technical Writing"],
    },
]

JOBS = [
    {
        "key": "logo",
        "title": "Modern Logo Design for Tech Startup",
        "description": (
            "We need a modern, professional logo for our tech startup. Looking for something "
            "clean and memorable that works in both digital and print formats."
        ),
        "category": "design",
        "budget": (200, 500),
        "duration": "1-2 weeks",
        "skills_required": ["Logo Design", "Illustration", "Brand Identity"],
    },
    {
        "key": "ecommerce",
        "title": "E-commerce Website Development",
        "description": (
            "Build a responsive e-commerce website with product listings, a shopping cart, "
            "user authentication and payment integration."
        ),
        "category": "development",
        "budget": (1500, 3000),
        "duration": "2-4 weeks",
        "skills_required": ["React", "Node.js", "PostgreSQL", "E-commerce"],
    },
    {
        "key": "blog",
        "title": "Blog Content Writing - Technology Articles",
        "description": (
            "Need 10 technology blog posts (800-1200 words each) about the latest trends in "
            "AI and machine learning, well researched and SEO optimized."
        ),
        "category": "writing",
        "budget": (300, 600),
        "duration": "2-4 weeks",
        "skills_required": ["Content Writing", "SEO", "Technology", "Research"],
    },
    {
        "key": "social",
        "title": "Social Media Marketing Campaign",
        "description": (
            "Create and manage a 3-month social media marketing campaign for our SaaS product, "
            "including strategy, content creation and analytics reporting."
        ),
        "category": "marketing",
        "budget": (800, 1500),
        "duration": "1-3 months",
        "skills_required": ["Social Media", "Marketing Strategy", "Content Creation"],
        "status": "completed",
        "freelancer": "sarah",
    },
]

# (job, freelancer, amount, duration, message)
BIDS = [
    ("logo", "sarah", 350, "1-2 weeks",
     "I can create a logo that represents your brand. Five years of brand identity work."),
    ("logo", "mike", 280, "2-4 weeks",
     "Full-stack developer with design skills; I can deliver a logo that fits a tech brand."),
    ("ecommerce", "mike", 2200, "2-4 weeks",
     "I build e-commerce platforms with React and Node.js and can deliver a scalable solution."),
    ("blog", "lisa", 450, "2-4 weeks",
     "I write engaging tech content focused on AI and machine learning."),
]


def seed():
    db = SyncSessionLocal()
    try:
        for model in (Notification, Rating, Bid, Job, User):
            db.execute(delete(model))
        print("Cleared existing data")

        hashed = hash_password(SAMPLE_PASSWORD)
        users = {}
        for data in USERS:
            user = User(
                id=uuid.uuid4(),
                name=data["name"],
                email=data["email"],
                hashed_password=hashed,
                role=data["role"],
                bio=data["bio"],
                skills=data["skills"],
            )
            db.add(user)
            users[data["key"]] = user
        db.flush()
        print(f"Created {len(users)} users")

        jobs = {}
        for data in JOBS:
            freelancer = users.get(data.get("freelancer"))
            job = Job(
                id=uuid.uuid4(),
                title=data["title"],
                description=data["description"],
                category=data["category"],
                budget_min=data["budget"][0],
                budget_max=data["budget"][1],
                duration=data["duration"],
                client_id=users["john"].id,
                freelancer_id=freelancer.id if freelancer else None,
                status=data.get("status", "open"),
                skills_required=data["skills_required"],
                attachments=[],
            )
            db.add(job)
            jobs[data["key"]] = job
        db.flush()
        print(f"Created {len(jobs)} jobs")

        for job_key, user_key, amount, duration, message in BIDS:
            db.add(Bid(
                id=uuid.uuid4(),
                job_id=jobs[job_key].id,
                freelancer_id=users[user_key].id,
                amount=amount,
                duration=duration,
                message=message,
            ))
        db.flush()
        print(f"Created {len(BIDS)} bids")

        sarah = users["sarah"]
        db.add(Rating(
            id=uuid.uuid4(),
            job_id=jobs["social"].id,
            client_id=users["john"].id,
            freelancer_id=sarah.id,
            rating=5,
            feedback="Excellent work! Sarah delivered beyond expectations and the campaign results were amazing.",
            quality=5,
            communication=5,
            professionalism=5,
        ))
        db.flush()

        # Same aggregation the API runs after each new rating
        average, count = db.execute(
            select(func.avg(Rating.rating), func.count(Rating.id)).where(Rating.freelancer_id == sarah.id)
        ).one()
        sarah.rating_average = float(average) if count else 0.0
        sarah.rating_count = count
        print("Created 1 rating")

        db.commit()
        print(f"\nDone. Log in with any seeded email and password '{SAMPLE_PASSWORD}'")

    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
