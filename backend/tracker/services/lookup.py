from collections.abc import Iterable

from sqlalchemy.orm import Session

from tracker.db.models import Project, User
from tracker.services.errors import ValidationError


# Integer primary keys are signed 64-bit in every supported backend.
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def storable_id(entity_id: int) -> bool:
    return MIN_ID <= entity_id <= MAX_ID


def ensure_references(db: Session, data: dict) -> None:
    """Reject payloads pointing at users or projects that do not exist."""
    checks = (
        ("created_by_id", User, "User"),
        ("assigned_user_id", User, "User"),
        ("project_id", Project, "Project"),
    )
    for key, model, label in checks:
        ref_id = data.get(key)
        if ref_id is None:
            continue
        if not storable_id(ref_id) or db.get(model, ref_id) is None:
            raise ValidationError(f"{label} with ID {ref_id} does not exist")


def reject_nulls(data: dict, required: Iterable[str]) -> None:
    for key in required:
        if key in data and data[key] is None:
            raise ValidationError(f"{key} may not be null")
