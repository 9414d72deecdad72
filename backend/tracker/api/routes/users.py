from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.db.schemas import UserCreate, UserOut, UserPatch
from tracker.db.session import get_db
from tracker.services import users as user_service


router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.post("", response_model=UserOut, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return user_service.create_user(db, payload)


@router.api_route("/{user_id}", methods=["PUT", "PATCH"], response_model=UserOut)
def update_user(user_id: int, payload: UserPatch, db: Session = Depends(get_db)):
    return user_service.update_user(db, user_id, payload)


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    user_service.delete_user(db, user_id)
