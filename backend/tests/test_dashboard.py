from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tracker.db.models import Base, Project, Task, User
from tracker.services.dashboard import summarize


def make_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)()


def add_task(db, title: str, due: date, status: str = "todo") -> Task:
    task = Task(title=title, assignee="Alice", priority="medium", status=status, due_date=due)
    db.add(task)
    db.commit()
    return task


def test_summarize_counts_and_upcoming_window():
    db = make_session()
    db.add_all([User(name="Alice"), User(name="Bob")])
    for title, status in (("A", "planning"), ("B", "in-progress"), ("C", "on-hold"), ("D", "completed")):
        db.add(Project(title=title, deadline=date(2025, 6, 1), priority="medium", status=status))
        db.commit()

    today = date(2025, 1, 1)
    add_task(db, "past", date(2024, 12, 31))
    add_task(db, "today", today)
    soon = add_task(db, "soon", date(2025, 1, 3))
    later = add_task(db, "edge", date(2025, 1, 8))
    add_task(db, "too far", date(2025, 1, 9))
    add_task(db, "done", date(2025, 1, 2), status="completed")

    summary = summarize(db, today=today)

    assert summary.total_projects == 4
    assert summary.active_projects == 2
    assert summary.total_tasks == 6
    assert summary.pending_tasks == 5
    assert summary.team_members == 2
    assert [project.title for project in summary.recent_projects] == ["D", "C", "B"]
    assert [task.id for task in summary.upcoming_tasks] == [soon.id, later.id]


def test_summarize_empty_database():
    summary = summarize(make_session(), today=date(2025, 1, 1))

    assert summary.total_projects == 0
    assert summary.pending_tasks == 0
    assert summary.recent_projects == []
    assert summary.upcoming_tasks == []
