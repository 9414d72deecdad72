from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.db.schemas import DashboardOut
from tracker.db.session import get_db
from tracker.services.dashboard import summarize


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOut)
def get_dashboard(db: Session = Depends(get_db)):
    return summarize(db)
