"""Task data models.

Zoho CRM owns the records; these models only rename fields for display and
validate what a caller asks to write.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from zoho_tasks.errors import ValidationError

# Zoho field -> display field
ZOHO_FIELD_MAP = {
    "Subject": "title",
    "Status": "status",
    "Priority": "priority",
    "Description": "notes",
    "Due_Date": "due_date",
    "Owner": "assignee",
    "Created_Time": "created_at",
    "Modified_Time": "updated_at",
}

# Display field -> Zoho field, for writable fields only
WRITABLE_FIELDS = {
    "title": "Subject",
    "status": "Status",
    "priority": "Priority",
    "notes": "Description",
    "due_date": "Due_Date",
    "assignee": "Owner",
}

# Display fields Zoho sets itself
READ_ONLY_FIELDS = frozenset({"id", "created_at", "updated_at"})


class TaskStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskPriority(str, Enum):
    HIGH = "High"
    NORMAL = "Normal"
    LOW = "Low"


def _owner_name(owner: Any) -> Optional[str]:
    if isinstance(owner, dict):
        return owner.get("name") or owner.get("id")
    return owner


class Task(BaseModel):
    """A Zoho CRM task reshaped into display fields."""

    model_config = ConfigDict(use_enum_values=True)

    id: Optional[str] = None
    title: Optional[str] = None
    # Plain strings as well: Zoho may hold values outside the three we write
    status: Optional[Union[TaskStatus, str]] = None
    priority: Optional[Union[TaskPriority, str]] = None
    notes: Optional[str] = None
    due_date: Optional[date] = None
    assignee: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_zoho(cls, record: dict[str, Any]) -> "Task":
        """Build a Task from a raw Zoho CRM record."""
        record_id = record.get("id")
        data: dict[str, Any] = {"id": str(record_id) if record_id is not None else None}
        for zoho_name, name in ZOHO_FIELD_MAP.items():
            value = record.get(zoho_name)
            if name == "assignee":
                value = _owner_name(value)
            data[name] = value
        return cls(**data)

    def to_display(self) -> dict[str, Any]:
        """JSON-ready dict, dates in ISO format."""
        return self.model_dump(mode="json")


class TaskFields(BaseModel):
    """Writable task fields shared by create and update requests."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    title: Optional[str] = Field(default=None, min_length=1)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    notes: Optional[str] = None
    due_date: Optional[date] = None
    assignee: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_read_only(cls, data: Any) -> Any:
        # A task echoed back from list/get carries these; they are not writable
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if k not in READ_ONLY_FIELDS}
        return data

    @field_validator("title")
    @classmethod
    def reject_blank_title(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("title must not be blank")
        return v

    def supplied(self) -> dict[str, Any]:
        """Only the fields the caller actually sent, JSON-ready."""
        return self.model_dump(mode="json", exclude_unset=True)

    def to_zoho(self) -> dict[str, Any]:
        """Translate supplied fields into a Zoho CRM record body."""
        record: dict[str, Any] = {}
        for name, value in self.supplied().items():
            zoho_name = WRITABLE_FIELDS[name]
            if name == "assignee" and value is not None:
                value = {"id": value}
            record[zoho_name] = value
        return record


class TaskCreate(TaskFields):
    """Fields for a new task; a title is required."""

    title: str = Field(..., min_length=1)


class TaskUpdate(TaskFields):
    """Fields to change on an existing task; at least one is required."""

    @model_validator(mode="after")
    def require_a_field(self) -> "TaskUpdate":
        if not self.model_fields_set:
            raise ValueError("at least one field must be supplied")
        return self


FieldsT = TypeVar("FieldsT", bound=TaskFields)


def parse_fields(model: type[FieldsT], data: dict[str, Any]) -> FieldsT:
    """Validate request data, raising the app's ValidationError on failure."""
    try:
        return model(**data)
    except PydanticValidationError as e:
        parts = []
        for err in e.errors():
            field = ".".join(str(loc) for loc in err["loc"]) or "body"
            parts.append(f"{field}: {err['msg']}")
        raise ValidationError("; ".join(parts)) from e
