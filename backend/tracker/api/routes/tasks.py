from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.db.schemas import TaskCreate, TaskOut, TaskPatch
from tracker.db.session import get_db
from tracker.services import tasks as task_service


router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskOut])
def list_tasks(db: Session = Depends(get_db)):
    return task_service.list_tasks(db)


@router.get("/user/{user_id}", response_model=list[TaskOut])
def list_user_tasks(user_id: int, db: Session = Depends(get_db)):
    return task_service.list_user_tasks(db, user_id)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: int, db: Session = Depends(get_db)):
    return task_service.get_task(db, task_id)


@router.post("", response_model=TaskOut, status_code=201)
def create_task(payload: TaskCreate, db: Session = Depends(get_db)):
    return task_service.create_task(db, payload)


@router.api_route("/{task_id}", methods=["PUT", "PATCH"], response_model=TaskOut)
def update_task(task_id: int, payload: TaskPatch, db: Session = Depends(get_db)):
    return task_service.update_task(db, task_id, payload)


@router.patch("/{task_id}/complete", response_model=TaskOut)
def mark_task_complete(task_id: int, db: Session = Depends(get_db)):
    return task_service.mark_task_complete(db, task_id)


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    task_service.delete_task(db, task_id)
