from datetime import datetime, timezone

from bson import ObjectId

from finance_tracker.errors import ValidationError
from finance_tracker.storage.mongo import parse_object_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def require_object_id(raw_id: str, label: str) -> ObjectId:
    object_id = parse_object_id(raw_id)
    if object_id is None:
        raise ValidationError(f"Invalid {label} ID")
    return object_id
