import logging

from sqlalchemy.orm import Session, selectinload

from tracker.db.models import Project
from tracker.db.schemas import ProjectCreate, ProjectPatch
from tracker.services.errors import NotFoundError
from tracker.services.lookup import ensure_references, reject_nulls, storable_id


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "deadline", "priority", "status")


def _query(db: Session):
    return db.query(Project).options(
        selectinload(Project.tasks),
        selectinload(Project.created_by),
    )


def list_projects(db: Session) -> list[Project]:
    return _query(db).order_by(Project.created_at.desc(), Project.id.desc()).all()


def get_project(db: Session, project_id: int) -> Project:
    project = _query(db).filter(Project.id == project_id).first() if storable_id(project_id) else None
    if not project:
        logger.debug("Project %s not found", project_id)
        raise NotFoundError("Project", project_id)
    return project


def create_project(db: Session, payload: ProjectCreate) -> Project:
    ensure_references(db, {"created_by_id": payload.created_by_id})

    project = Project(
        title=payload.title,
        description=payload.description or "",
        deadline=payload.deadline,
        priority=payload.priority,
        status=payload.status,
        created_by_id=payload.created_by_id,
    )
    db.add(project)
    db.commit()
    db.refresh(project)

    logger.info("Created project %s (%s)", project.id, project.title)
    return project


def update_project(db: Session, project_id: int, payload: ProjectPatch) -> Project:
    project = get_project(db, project_id)

    patch_data = payload.model_dump(exclude_unset=True)
    if not patch_data:
        return project

    reject_nulls(patch_data, REQUIRED_FIELDS)
    ensure_references(db, patch_data)
    if "description" in patch_data and patch_data["description"] is None:
        patch_data["description"] = ""

    for key, value in patch_data.items():
        setattr(project, key, value)

    db.commit()
    db.refresh(project)

    logger.info("Updated project %s fields=%s", project.id, sorted(patch_data))
    return project


def delete_project(db: Session, project_id: int) -> None:
    project = db.get(Project, project_id) if storable_id(project_id) else None
    if not project:
        logger.debug("Project %s not found", project_id)
        raise NotFoundError("Project", project_id)

    db.delete(project)
    db.commit()

    logger.info("Deleted project %s", project_id)
