import logging

from sqlalchemy.orm import Session

from tracker.db.models import User
from tracker.db.schemas import UserCreate, UserPatch
from tracker.services.errors import NotFoundError
from tracker.services.lookup import reject_nulls, storable_id


logger = logging.getLogger(__name__)


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.name.asc(), User.id.asc()).all()


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id) if storable_id(user_id) else None
    if not user:
        logger.debug("User %s not found", user_id)
        raise NotFoundError("User", user_id)
    return user


def create_user(db: Session, payload: UserCreate) -> User:
    user = User(name=payload.name)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Created user %s (%s)", user.id, user.name)
    return user


def update_user(db: Session, user_id: int, payload: UserPatch) -> User:
    user = get_user(db, user_id)

    patch_data = payload.model_dump(exclude_unset=True)
    if not patch_data:
        return user

    reject_nulls(patch_data, ("name",))
    for key, value in patch_data.items():
        setattr(user, key, value)

    db.commit()
    db.refresh(user)

    logger.info("Updated user %s", user.id)
    return user


def delete_user(db: Session, user_id: int) -> None:
    # Created projects and assigned tasks keep existing with their reference cleared.
    user = get_user(db, user_id)

    db.delete(user)
    db.commit()

    logger.info("Deleted user %s", user_id)
