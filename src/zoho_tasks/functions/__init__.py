"""Serverless entry points.

Point the platform at ``zoho_tasks.functions.handler`` for a single routed
function, or at the per-operation handlers for one function each.
"""

from zoho_tasks.functions.tasks import (
    create_task,
    delete_task,
    get_task,
    handler,
    list_tasks,
    update_task,
)

__all__ = [
    "create_task",
    "delete_task",
    "get_task",
    "handler",
    "list_tasks",
    "update_task",
]
