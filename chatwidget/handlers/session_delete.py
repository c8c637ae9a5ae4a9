"""Backend session delete notifiers.

Two ways to tell the backend a session is over:

EventSessionDeleter:
    Emits ``deleteSession {"sessionId": sid}`` on the still-open socket. The
    transport flushes it before the socket closes.

HttpSessionDeleter:
    Sends ``DELETE {base_url}{path}`` (default path
    ``/api/sessions/{session_id}``) out of band with httpx, bounded by a
    timeout. Used by deployments whose backend exposes the REST endpoint.

Both raise ``SessionDeleteError``; callers log it and carry on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

import httpx

from ..errors import SessionDeleteError
from ..helpers.urls import build_delete_url
from ..settings import ChatSettings
from ..transport import Transport

logger = logging.getLogger(__name__)

DELETE_SESSION_EVENT = "deleteSession"


class SessionDeleter(Protocol):
    async def delete(self, transport: Transport, session_id: str) -> None: ...


class EventSessionDeleter:
    async def delete(self, transport: Transport, session_id: str) -> None:
        if not transport.connected:
            raise SessionDeleteError(session_id, "socket is not connected")
        transport.emit(DELETE_SESSION_EVENT, {"sessionId": session_id})


class HttpSessionDeleter:
    def __init__(
        self,
        base_url: str,
        path_template: str,
        *,
        timeout_s: float,
        client_factory: Callable[..., httpx.AsyncClient] = httpx.AsyncClient,
    ) -> None:
        self._base_url = base_url
        self._path_template = path_template
        self._timeout_s = timeout_s
        self._client_factory = client_factory

    def url_for(self, session_id: str) -> str:
        return build_delete_url(self._base_url, self._path_template, session_id)

    async def delete(self, transport: Transport, session_id: str) -> None:
        url = self.url_for(session_id)
        try:
            async with self._client_factory(timeout=self._timeout_s) as client:
                response = await client.delete(url)
        except httpx.HTTPError as exc:
            raise SessionDeleteError(session_id, str(exc) or type(exc).__name__) from exc
        if response.is_error:
            raise SessionDeleteError(
                session_id,
                response.reason_phrase or "request rejected",
                status_code=response.status_code,
            )
        logger.debug("DELETE %s -> %s", url, response.status_code)


def build_session_deleter(settings: ChatSettings) -> SessionDeleter:
    if settings.session_delete_mode == "http":
        return HttpSessionDeleter(
            settings.server_url,
            settings.session_delete_path,
            timeout_s=settings.session_delete_timeout_s,
        )
    return EventSessionDeleter()


__all__ = [
    "DELETE_SESSION_EVENT",
    "SessionDeleter",
    "EventSessionDeleter",
    "HttpSessionDeleter",
    "build_session_deleter",
]
