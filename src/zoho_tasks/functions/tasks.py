"""Serverless handlers forwarding task CRUD to Zoho CRM.

Each handler takes an API-gateway style ``event`` and returns a
``{"statusCode", "headers", "body"}`` dict. One request means exactly one
connector call; failures come back as ``{"error", "hint"}`` bodies.
"""

import asyncio
import functools
import time
import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from zoho_tasks.api.client import get_client
from zoho_tasks.api.tasks import TasksAPI
from zoho_tasks.errors import ValidationError, ZohoTasksError
from zoho_tasks.functions.http import (
    error_response,
    int_param,
    json_response,
    method_of,
    parse_body,
    query_params,
    task_id_of,
)
from zoho_tasks.models.task import Task, TaskCreate, TaskUpdate, parse_fields
from zoho_tasks.utils.logger import get_logger

Event = dict[str, Any]
Response = dict[str, Any]


def function_handler(func: Callable[[Event], Awaitable[Response]]):
    """Run an async handler to completion and turn errors into responses."""

    @functools.wraps(func)
    def wrapper(event: Event, context: Any = None) -> Response:
        logger = get_logger()
        name = func.__name__.lstrip("_")
        start = time.monotonic()
        logger.info("function started: %s", name)
        try:
            response = asyncio.run(func(event or {}))
        except ZohoTasksError as e:
            logger.error(
                "function failed: %s (%.3fs) - %s",
                name,
                time.monotonic() - start,
                e.message,
            )
            return error_response(e)
        except Exception as e:
            logger.error(
                "function crashed: %s (%.3fs) - %s\n%s",
                name,
                time.monotonic() - start,
                e,
                traceback.format_exc(),
            )
            return json_response(500, {"error": "Internal error"})

        logger.info(
            "function completed: %s (%.3fs) -> %s",
            name,
            time.monotonic() - start,
            response["statusCode"],
        )
        return response

    return wrapper


def _require_id(event: Event, body: dict[str, Any] | None = None) -> str:
    task_id = task_id_of(event, body)
    if not task_id:
        raise ValidationError("A task id is required")
    return task_id


async def _list_tasks(event: Event) -> Response:
    params = query_params(event)
    page = int_param(params, "page")
    per_page = int_param(params, "per_page")

    async with get_client() as client:
        result = await TasksAPI(client).list_tasks(page=page, per_page=per_page)

    tasks = [Task.from_zoho(record).to_display() for record in result["data"]]
    return json_response(200, {"tasks": tasks, "info": result["info"]})


async def _get_task(event: Event) -> Response:
    task_id = _require_id(event)
    async with get_client() as client:
        record = await TasksAPI(client).get_task(task_id)
    return json_response(200, {"task": Task.from_zoho(record).to_display()})


async def _create_task(event: Event) -> Response:
    body = parse_body(event)
    fields = parse_fields(TaskCreate, body)

    async with get_client() as client:
        task_id = await TasksAPI(client).create_task(fields.to_zoho())
    return json_response(201, {"id": task_id, "task": fields.supplied()})


async def _update_task(event: Event) -> Response:
    body = parse_body(event)
    task_id = _require_id(event, body)
    body.pop("id", None)
    fields = parse_fields(TaskUpdate, body)

    async with get_client() as client:
        await TasksAPI(client).update_task(task_id, fields.to_zoho())
    return json_response(
        200, {"id": task_id, "updated": sorted(fields.model_fields_set)}
    )


async def _delete_task(event: Event) -> Response:
    task_id = _require_id(event, parse_body(event))
    async with get_client() as client:
        await TasksAPI(client).delete_task(task_id)
    return json_response(200, {"id": task_id, "deleted": True})


async def _route(event: Event) -> Response:
    method = method_of(event)
    if method == "OPTIONS":
        return json_response(204)
    if method == "GET":
        if task_id_of(event):
            return await _get_task(event)
        return await _list_tasks(event)
    if method == "POST":
        return await _create_task(event)
    if method in ("PUT", "PATCH"):
        return await _update_task(event)
    if method == "DELETE":
        return await _delete_task(event)
    return json_response(405, {"error": f"Method not allowed: {method or '(none)'}"})


list_tasks = function_handler(_list_tasks)
get_task = function_handler(_get_task)
create_task = function_handler(_create_task)
update_task = function_handler(_update_task)
delete_task = function_handler(_delete_task)
handler = function_handler(_route)
