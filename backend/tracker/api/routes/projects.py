from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.db.schemas import ProjectCreate, ProjectOut, ProjectPatch
from tracker.db.session import get_db
from tracker.services import projects as project_service


router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=list[ProjectOut])
def list_projects(db: Session = Depends(get_db)):
    return project_service.list_projects(db)


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: int, db: Session = Depends(get_db)):
    return project_service.get_project(db, project_id)


@router.post("", response_model=ProjectOut, status_code=201)
def create_project(payload: ProjectCreate, db: Session = Depends(get_db)):
    return project_service.create_project(db, payload)


@router.api_route("/{project_id}", methods=["PUT", "PATCH"], response_model=ProjectOut)
def update_project(project_id: int, payload: ProjectPatch, db: Session = Depends(get_db)):
    return project_service.update_project(db, project_id, payload)


@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: int, db: Session = Depends(get_db)):
    project_service.delete_project(db, project_id)
