"""
HTTP client for the Task Manager API.

``TaskClient`` wraps the REST endpoints with ``requests``; ``main`` exposes
it as the ``taskmanager-client`` command::

    taskmanager-client create "Learn the client" --description "first task"
    taskmanager-client list --completed false
    taskmanager-client update 3 --completed true
    taskmanager-client delete 3
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

import requests

from .errors import ClientError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.environ.get("TASKMANAGER_URL", "http://localhost:8080")
DEFAULT_TIMEOUT_SECONDS = 5.0


class TaskClient:
    """
    Thin wrapper around the ``/tasks`` endpoints.

    Args:
        base_url: Root URL of a running service.
        session: Optional ``requests.Session``; one is created when omitted.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise ClientError(f"Could not reach task service at {self.base_url}: {exc}") from exc

        if response.status_code >= 400:
            try:
                message = response.json().get("error", response.reason)
            except (ValueError, AttributeError):
                message = response.text or response.reason
            raise ClientError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def list_tasks(self, completed: bool | None = None) -> list[dict[str, Any]]:
        params = None
        if completed is not None:
            params = {"completed": "true" if completed else "false"}
        return self._request("GET", "/tasks", params=params)

    def get_task(self, task_id: int) -> dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}")

    def create_task(
        self,
        title: str,
        description: str | None = None,
        completed: bool = False,
    ) -> dict[str, Any]:
        payload = {"title": title, "description": description, "completed": completed}
        return self._request("POST", "/tasks", json=payload)

    def update_task(self, task_id: int, **fields: Any) -> dict[str, Any]:
        """Send only the given fields (title, description, completed)."""
        return self._request("PUT", f"/tasks/{task_id}", json=fields)

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/tasks/{task_id}")


# -----------------------------------------------------------------------------
# Command line
# -----------------------------------------------------------------------------

def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"true", "1", "yes"}:
        return True
    if lowered in {"false", "0", "no"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for ``taskmanager-client``."""
    parser = argparse.ArgumentParser(
        prog="taskmanager-client",
        description="Call a running Task Manager service."
    )
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Service root URL")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SECONDS)
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List tasks")
    list_cmd.add_argument("--completed", type=_parse_bool, default=None)

    get_cmd = commands.add_parser("get", help="Show one task")
    get_cmd.add_argument("task_id", type=int)

    create_cmd = commands.add_parser("create", help="Create a task")
    create_cmd.add_argument("title")
    create_cmd.add_argument("--description", default=None)
    create_cmd.add_argument("--completed", type=_parse_bool, default=False)

    update_cmd = commands.add_parser("update", help="Update fields of a task")
    update_cmd.add_argument("task_id", type=int)
    update_cmd.add_argument("--title")
    update_cmd.add_argument("--description")
    update_cmd.add_argument("--completed", type=_parse_bool)

    delete_cmd = commands.add_parser("delete", help="Delete a task")
    delete_cmd.add_argument("task_id", type=int)

    return parser


def run(args: argparse.Namespace, client: TaskClient) -> Any:
    """Dispatch a parsed command to ``client`` and return the decoded result."""
    if args.command == "list":
        return client.list_tasks(completed=args.completed)
    if args.command == "get":
        return client.get_task(args.task_id)
    if args.command == "create":
        return client.create_task(args.title, description=args.description, completed=args.completed)
    if args.command == "update":
        fields = {
            name: getattr(args, name)
            for name in ("title", "description", "completed")
            if getattr(args, name) is not None
        }
        return client.update_task(args.task_id, **fields)
    if args.command == "delete":
        client.delete_task(args.task_id)
        return None
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``taskmanager-client``; returns the process exit code."""
    args = build_parser().parse_args(argv)
    client = TaskClient(args.base_url, timeout=args.timeout)
    try:
        result = run(args, client)
    except ClientError as exc:
        status = f" ({exc.status_code})" if exc.status_code else ""
        print(f"Error{status}: {exc.message}", file=sys.stderr)
        return 1

    if result is not None:
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
