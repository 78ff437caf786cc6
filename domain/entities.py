
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from domain.errors import ValidationError

# Fields a caller may change after creation; id and creation_date are fixed.
MUTABLE_FIELDS = ("title", "description", "status")

FIELD_MESSAGES = {
    "title": "Title is required",
    "description": "Description is required",
    "status": "Status must be a boolean",
}


def field_error(name: str, value: Any = None, location: str = "body", has_value: bool = True) -> Dict[str, Any]:
    error = {"type": "field", "path": name, "location": location, "msg": FIELD_MESSAGES[name]}
    if has_value:
        error["value"] = value
    return error


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    title: str
    description: str
    status: bool = False
    id: Optional[int] = None
    creation_date: datetime = field(default_factory=_utcnow)

    def validation_errors(self) -> List[Dict[str, Any]]:
        errors = []
        for name in ("title", "description"):
            value = getattr(self, name)
            if not isinstance(value, str) or value == "":
                errors.append(field_error(name, value))
        # bool check must exclude ints, True == 1 in Python
        if type(self.status) is not bool:
            errors.append(field_error("status", self.status))
        return errors

    def validate(self) -> "Task":
        errors = self.validation_errors()
        if errors:
            raise ValidationError(errors)
        return self

    def merged(self, changes: Dict[str, Any]) -> "Task":
        """Return a validated copy with ``changes`` applied to the mutable fields."""
        updates = {name: value for name, value in changes.items() if name in MUTABLE_FIELDS}
        return replace(self, **updates).validate()
