import logging

from sqlalchemy.orm import Session, selectinload

from tracker.db.models import Task
from tracker.db.schemas import TaskCreate, TaskPatch
from tracker.services.errors import NotFoundError
from tracker.services.lookup import ensure_references, reject_nulls, storable_id
from tracker.services.users import get_user


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "assignee", "priority", "status", "due_date", "progress")


def _query(db: Session):
    return db.query(Task).options(
        selectinload(Task.project),
        selectinload(Task.assigned_user),
    )


def list_tasks(db: Session) -> list[Task]:
    return _query(db).order_by(Task.created_at.desc(), Task.id.desc()).all()


def list_user_tasks(db: Session, user_id: int) -> list[Task]:
    user = get_user(db, user_id)
    return (
        _query(db)
        .filter(Task.assigned_user_id == user.id)
        .order_by(Task.created_at.desc(), Task.id.desc())
        .all()
    )


def get_task(db: Session, task_id: int) -> Task:
    task = _query(db).filter(Task.id == task_id).first() if storable_id(task_id) else None
    if not task:
        logger.debug("Task %s not found", task_id)
        raise NotFoundError("Task", task_id)
    return task


def create_task(db: Session, payload: TaskCreate) -> Task:
    ensure_references(
        db,
        {"project_id": payload.project_id, "assigned_user_id": payload.assigned_user_id},
    )

    task = Task(
        title=payload.title,
        description=payload.description or "",
        assignee=payload.assignee,
        priority=payload.priority,
        status=payload.status,
        due_date=payload.due_date,
        progress=payload.progress if payload.progress is not None else 0,
        project_id=payload.project_id,
        assigned_user_id=payload.assigned_user_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info("Created task %s (%s)", task.id, task.title)
    return task


def update_task(db: Session, task_id: int, payload: TaskPatch) -> Task:
    task = get_task(db, task_id)

    patch_data = payload.model_dump(exclude_unset=True)
    if not patch_data:
        return task

    reject_nulls(patch_data, REQUIRED_FIELDS)
    ensure_references(db, patch_data)
    if "description" in patch_data and patch_data["description"] is None:
        patch_data["description"] = ""

    for key, value in patch_data.items():
        setattr(task, key, value)

    db.commit()
    db.refresh(task)

    logger.info("Updated task %s fields=%s", task.id, sorted(patch_data))
    return task


def delete_task(db: Session, task_id: int) -> None:
    task = get_task(db, task_id)

    db.delete(task)
    db.commit()

    logger.info("Deleted task %s", task_id)


def mark_task_complete(db: Session, task_id: int) -> Task:
    task = get_task(db, task_id)

    task.status = "completed"
    task.progress = 100

    db.commit()
    db.refresh(task)

    logger.info("Marked task %s complete", task.id)
    return task
