from fastapi import APIRouter

from tracker.api.routes import dashboard, projects, tasks, users


api_router = APIRouter(prefix="/api")
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(users.router)
api_router.include_router(dashboard.router)
