from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship


Base = declarative_base()

PRIORITIES = ("low", "medium", "high")
PROJECT_STATUSES = ("planning", "in-progress", "on-hold", "completed")
TASK_STATUSES = ("todo", "in-progress", "review", "completed")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _in(column: str, values: tuple[str, ...]) -> str:
    return f"{column} IN ({', '.join(repr(value) for value in values)})"


class User(Base):
    __tablename__ = "Users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)

    projects = relationship("Project", back_populates="created_by")
    tasks = relationship("Task", back_populates="assigned_user")


class Project(Base):
    __tablename__ = "Projects"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    deadline = Column(Date, nullable=False)
    priority = Column(String, nullable=False, default="medium")
    status = Column(String, nullable=False, default="planning")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_by_id = Column(Integer, ForeignKey("Users.id", onupdate="CASCADE", ondelete="SET NULL"))

    __table_args__ = (
        CheckConstraint(_in("priority", PRIORITIES), name="ck_projects_priority"),
        CheckConstraint(_in("status", PROJECT_STATUSES), name="ck_projects_status"),
    )

    created_by = relationship("User", back_populates="projects")
    tasks = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Task.id",
    )


class Task(Base):
    __tablename__ = "Tasks"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    assignee = Column(String, nullable=False)
    priority = Column(String, nullable=False, default="medium")
    status = Column(String, nullable=False, default="todo")
    due_date = Column(Date, nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    project_id = Column(Integer, ForeignKey("Projects.id", onupdate="CASCADE", ondelete="CASCADE"))
    assigned_user_id = Column(Integer, ForeignKey("Users.id", onupdate="CASCADE", ondelete="SET NULL"))

    __table_args__ = (
        CheckConstraint(_in("priority", PRIORITIES), name="ck_tasks_priority"),
        CheckConstraint(_in("status", TASK_STATUSES), name="ck_tasks_status"),
        CheckConstraint("progress BETWEEN 0 AND 100", name="ck_tasks_progress"),
    )

    project = relationship("Project", back_populates="tasks")
    assigned_user = relationship("User", back_populates="tasks")
