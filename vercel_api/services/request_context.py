"""Per-call correlation ID, carried in a contextvar so log lines can be grouped."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

request_id_var: ContextVar[str] = ContextVar("vercel_request_id", default="")


def generate_request_id() -> str:
    return uuid.uuid4().hex


def get_request_id() -> str:
    """ID of the API call in progress, or ``""`` outside one."""
    return request_id_var.get()


@contextmanager
def request_scope() -> Iterator[str]:
    """Run the enclosed API call under a fresh ID, restoring the previous one after."""
    token = request_id_var.set(generate_request_id())
    try:
        yield request_id_var.get()
    finally:
        request_id_var.reset(token)
