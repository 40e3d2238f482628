"""Data models for zoho-tasks."""

from zoho_tasks.models.task import (
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)

__all__ = ["Task", "TaskCreate", "TaskPriority", "TaskStatus", "TaskUpdate"]
