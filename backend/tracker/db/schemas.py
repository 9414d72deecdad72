from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints


Priority = Literal["low", "medium", "high"]
ProjectStatus = Literal["planning", "in-progress", "on-hold", "completed"]
TaskStatus = Literal["todo", "in-progress", "review", "completed"]
NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

DUE_DATE_INPUT = AliasChoices("dueDate", "due_date")
DUE_DATE_OUTPUT = AliasChoices("due_date", "dueDate")


class UserCreate(BaseModel):
    name: NonBlank


class UserPatch(BaseModel):
    name: NonBlank | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ProjectCreate(BaseModel):
    title: NonBlank
    description: str | None = None
    deadline: date
    priority: Priority
    status: ProjectStatus
    created_by_id: int | None = None


class ProjectPatch(BaseModel):
    title: NonBlank | None = None
    description: str | None = None
    deadline: date | None = None
    priority: Priority | None = None
    status: ProjectStatus | None = None
    created_by_id: int | None = None


class ProjectSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    deadline: date
    priority: str
    status: str
    created_at: datetime


class TaskSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    assignee: str
    priority: str
    status: str
    due_date: date = Field(validation_alias=DUE_DATE_OUTPUT, serialization_alias="dueDate")
    progress: int
    project_id: int | None


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    deadline: date
    priority: str
    status: str
    created_at: datetime
    created_by_id: int | None
    created_by: UserOut | None = None
    tasks: list[TaskSummary] = []


class TaskCreate(BaseModel):
    title: NonBlank
    description: str | None = None
    assignee: NonBlank
    priority: Priority
    status: TaskStatus
    due_date: date = Field(validation_alias=DUE_DATE_INPUT)
    progress: int | None = Field(default=None, ge=0, le=100)
    project_id: int | None = None
    assigned_user_id: int | None = None


class TaskPatch(BaseModel):
    title: NonBlank | None = None
    description: str | None = None
    assignee: NonBlank | None = None
    priority: Priority | None = None
    status: TaskStatus | None = None
    due_date: date | None = Field(default=None, validation_alias=DUE_DATE_INPUT)
    progress: int | None = Field(default=None, ge=0, le=100)
    project_id: int | None = None
    assigned_user_id: int | None = None


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    assignee: str
    priority: str
    status: str
    due_date: date = Field(validation_alias=DUE_DATE_OUTPUT, serialization_alias="dueDate")
    progress: int
    created_at: datetime
    updated_at: datetime
    project_id: int | None
    assigned_user_id: int | None
    project: ProjectSummary | None = None
    assigned_user: UserOut | None = Field(
        default=None,
        validation_alias=AliasChoices("assigned_user", "assignedUser"),
        serialization_alias="assignedUser",
    )


class DashboardOut(BaseModel):
    total_projects: int
    active_projects: int
    total_tasks: int
    pending_tasks: int
    team_members: int
    recent_projects: list[ProjectSummary]
    upcoming_tasks: list[TaskSummary]
