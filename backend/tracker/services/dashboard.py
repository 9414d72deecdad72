from datetime import date, timedelta

from sqlalchemy.orm import Session

from tracker.db.models import Project, Task, User
from tracker.db.schemas import DashboardOut, ProjectSummary, TaskSummary


ACTIVE_PROJECT_STATUSES = ("planning", "in-progress")
RECENT_PROJECTS = 3
UPCOMING_TASKS = 5
UPCOMING_WINDOW = timedelta(days=7)


def summarize(db: Session, today: date | None = None) -> DashboardOut:
    """Aggregate counts plus the recent projects and tasks due in the coming week."""
    today = today or date.today()

    recent_projects = (
        db.query(Project)
        .order_by(Project.created_at.desc(), Project.id.desc())
        .limit(RECENT_PROJECTS)
        .all()
    )
    upcoming_tasks = (
        db.query(Task)
        .filter(
            Task.status != "completed",
            Task.due_date > today,
            Task.due_date <= today + UPCOMING_WINDOW,
        )
        .order_by(Task.due_date.asc(), Task.id.asc())
        .limit(UPCOMING_TASKS)
        .all()
    )

    return DashboardOut(
        total_projects=db.query(Project).count(),
        active_projects=db.query(Project).filter(Project.status.in_(ACTIVE_PROJECT_STATUSES)).count(),
        total_tasks=db.query(Task).count(),
        pending_tasks=db.query(Task).filter(Task.status != "completed").count(),
        team_members=db.query(User).count(),
        recent_projects=[ProjectSummary.model_validate(project) for project in recent_projects],
        upcoming_tasks=[TaskSummary.model_validate(task) for task in upcoming_tasks],
    )
