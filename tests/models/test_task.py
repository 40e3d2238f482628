"""Unit tests for zoho_tasks/models/task.py."""

from __future__ import annotations

from datetime import date

import pytest

from tests.fakes import zoho_record
from zoho_tasks.errors import ValidationError
from zoho_tasks.models.task import (
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
    parse_fields,
)


class TestTaskFromZoho:
    def test_maps_all_display_fields(self):
        task = Task.from_zoho(zoho_record("42", "Call Acme"))

        assert task.id == "42"
        assert task.title == "Call Acme"
        assert task.status == "Not Started"
        assert task.priority == "High"
        assert task.notes == "Ask about renewal"
        assert task.due_date == date(2026, 11, 1)
        assert task.assignee == "Pat Doe"
        assert task.created_at.year == 2026
        assert task.updated_at.hour == 10

    def test_drops_other_zoho_fields(self):
        display = Task.from_zoho(zoho_record()).to_display()

        assert set(display) == {
            "id",
            "title",
            "status",
            "priority",
            "notes",
            "due_date",
            "assignee",
            "created_at",
            "updated_at",
        }

    def test_owner_without_name_falls_back_to_id(self):
        task = Task.from_zoho(zoho_record(Owner={"id": "999"}))
        assert task.assignee == "999"

    def test_sparse_record(self):
        task = Task.from_zoho({"id": 123})

        assert task.id == "123"
        assert task.title is None
        assert task.assignee is None
        assert task.to_display()["due_date"] is None

    def test_record_without_id(self):
        task = Task.from_zoho({"Subject": "Orphan"})

        assert task.id is None
        assert task.to_display()["title"] == "Orphan"

    def test_zoho_only_status_passes_through(self):
        """Values Zoho allows but we never write still display."""
        task = Task.from_zoho(zoho_record(Status="Waiting for input", Priority="Highest"))

        assert task.status == "Waiting for input"
        assert task.priority == "Highest"


class TestTaskCreate:
    def test_title_required(self):
        with pytest.raises(ValidationError, match="title"):
            parse_fields(TaskCreate, {"status": "Completed"})

    def test_title_kept_as_sent(self):
        fields = TaskCreate(title="  Call  ")
        assert fields.title == "  Call  "
        assert fields.to_zoho() == {"Subject": "  Call  "}

    def test_whitespace_title_rejected(self):
        with pytest.raises(ValidationError, match="blank"):
            parse_fields(TaskCreate, {"title": "  "})

    def test_enums_accept_values(self):
        fields = TaskCreate(title="x", status="In Progress", priority="Low")

        assert fields.status == TaskStatus.IN_PROGRESS.value
        assert fields.priority == TaskPriority.LOW.value

    def test_supplied_skips_unset_fields(self):
        fields = TaskCreate(title="x", notes="n")
        assert fields.supplied() == {"title": "x", "notes": "n"}

    def test_to_zoho(self):
        fields = TaskCreate(
            title="Call Acme",
            status="Completed",
            priority="Normal",
            notes="Ask",
            due_date="2026-11-01",
            assignee="4150868000000099",
        )

        assert fields.to_zoho() == {
            "Subject": "Call Acme",
            "Status": "Completed",
            "Priority": "Normal",
            "Description": "Ask",
            "Due_Date": "2026-11-01",
            "Owner": {"id": "4150868000000099"},
        }

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="Subject"):
            parse_fields(TaskCreate, {"title": "x", "Subject": "y"})


class TestTaskUpdate:
    def test_needs_one_field(self):
        with pytest.raises(ValidationError, match="at least one field"):
            parse_fields(TaskUpdate, {})

    def test_only_supplied_fields_in_zoho_body(self):
        fields = parse_fields(TaskUpdate, {"priority": "Low"})
        assert fields.to_zoho() == {"Priority": "Low"}

    def test_clearing_notes_is_sent(self):
        fields = parse_fields(TaskUpdate, {"notes": None})
        assert fields.to_zoho() == {"Description": None}

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            parse_fields(TaskUpdate, {"title": ""})

    def test_read_only_display_fields_ignored(self):
        displayed = Task.from_zoho(zoho_record("42", "Call Acme")).to_display()
        displayed["notes"] = "Changed"

        fields = parse_fields(TaskUpdate, displayed)

        assert "created_at" not in fields.supplied()
        assert fields.to_zoho()["Description"] == "Changed"
        assert "id" not in fields.to_zoho()

    def test_only_read_only_fields_is_not_an_update(self):
        with pytest.raises(ValidationError, match="at least one field"):
            parse_fields(TaskUpdate, {"created_at": "2026-10-01T09:00:00+00:00"})
