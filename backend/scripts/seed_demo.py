from datetime import date, timedelta

from sqlalchemy.orm import Session

from tracker.db.models import Project
from tracker.db.schemas import ProjectCreate, TaskCreate, UserCreate
from tracker.db.session import DATABASE_URL, SessionLocal, init_db
from tracker.services import projects, tasks, users


def seed(db: Session, today: date) -> bool:
    if db.query(Project).first() is not None:
        return False

    alice = users.create_user(db, UserCreate(name="Alice"))
    bob = users.create_user(db, UserCreate(name="Bob"))

    redesign = projects.create_project(
        db,
        ProjectCreate(
            title="Website redesign",
            description="Refresh the marketing site",
            deadline=today + timedelta(days=30),
            priority="high",
            status="in-progress",
            created_by_id=alice.id,
        ),
    )
    projects.create_project(
        db,
        ProjectCreate(
            title="Quarterly report",
            deadline=today + timedelta(days=60),
            priority="medium",
            status="planning",
            created_by_id=bob.id,
        ),
    )

    for title, assignee, offset, progress in (
        ("Draft wireframes", alice, 3, 40),
        ("Pick color palette", bob, 5, 0),
        ("Migrate blog posts", alice, 12, 10),
    ):
        tasks.create_task(
            db,
            TaskCreate(
                title=title,
                assignee=assignee.name,
                priority="medium",
                status="in-progress" if progress else "todo",
                dueDate=today + timedelta(days=offset),
                progress=progress,
                project_id=redesign.id,
                assigned_user_id=assignee.id,
            ),
        )
    return True


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        created = seed(db, date.today())
    finally:
        db.close()
    print(f"Demo seed {'complete' if created else 'skipped, data exists'}: {DATABASE_URL}")


if __name__ == "__main__":
    main()
