"""
Single-writer session actor.

Two triggers mutate a session: user actions (load, switch company, reload)
and auth-state notifications (SIGNED_IN, SIGNED_OUT). Both post messages to
one queue; a single task owns the SessionContext and handles messages one at
a time, so the triggers can no longer interleave halfway through a load.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from supabase import Client

from beeconta.session.context import SessionContext, SessionState

logger = logging.getLogger(__name__)

AUTH_EVENT_SIGNED_IN = "SIGNED_IN"
AUTH_EVENT_SIGNED_OUT = "SIGNED_OUT"

Handler = Callable[[SessionContext], Awaitable[Any]]


@dataclass
class _Message:
    handler: Optional[Handler]
    future: "asyncio.Future[Any]"


class SessionActor:
    """
    Owns a SessionContext and applies messages to it strictly in order.

    The worker task starts on first use, on the running event loop.
    """

    def __init__(self, context: Optional[SessionContext] = None) -> None:
        self._context = context or SessionContext()
        self._queue: "asyncio.Queue[_Message]" = asyncio.Queue()
        self._task: Optional["asyncio.Task[None]"] = None
        self._closed = False

    def _ensure_started(self) -> None:
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        while True:
            message = await self._queue.get()
            try:
                if message.handler is None:
                    message.future.set_result(None)
                    return
                result = await message.handler(self._context)
            except Exception as e:
                logger.error(f"Session message failed: {e}")
                if not message.future.done():
                    message.future.set_exception(e)
            else:
                if not message.future.done():
                    message.future.set_result(result)
            finally:
                self._queue.task_done()

    async def _send(self, handler: Optional[Handler]) -> Any:
        if self._closed:
            raise RuntimeError("Session actor is closed")

        self._ensure_started()
        future: "asyncio.Future[Any]" = asyncio.get_running_loop().create_future()
        await self._queue.put(_Message(handler=handler, future=future))
        return await future

    async def load(self, supabase_client: Client, access_token: str) -> SessionState:
        return await self._send(lambda context: context.load(supabase_client, access_token))

    async def reload_companies(self, supabase_client: Client) -> SessionState:
        return await self._send(lambda context: context.reload_companies(supabase_client))

    async def set_active_company(self, supabase_client: Client, company_id: str) -> bool:
        return await self._send(
            lambda context: context.set_active_company(supabase_client, company_id)
        )

    async def update_user(self, user: Dict[str, Any]) -> SessionState:
        async def _apply(context: SessionContext) -> SessionState:
            return context.apply_user_update(user)

        return await self._send(_apply)

    async def snapshot(self) -> SessionState:
        async def _snapshot(context: SessionContext) -> SessionState:
            return context.snapshot()

        return await self._send(_snapshot)

    async def notify_auth_event(
        self,
        event: str,
        supabase_client: Optional[Client] = None,
        access_token: Optional[str] = None
    ) -> SessionState:
        """
        Apply an auth-state notification.

        SIGNED_IN reloads the session (client and token required);
        SIGNED_OUT clears it. Other events only return the current state.
        """
        if event == AUTH_EVENT_SIGNED_IN:
            if supabase_client is None or access_token is None:
                raise ValueError("SIGNED_IN requires a client and an access token")
            return await self.load(supabase_client, access_token)

        if event == AUTH_EVENT_SIGNED_OUT:
            async def _clear(context: SessionContext) -> SessionState:
                return context.clear()

            return await self._send(_clear)

        logger.debug(f"Ignoring auth event {event}")
        return await self.snapshot()

    async def close(self) -> None:
        """
        Stop the worker after the messages already queued.

        New messages are rejected as soon as close starts; anything left in
        the queue once the worker stops fails with RuntimeError.
        """
        if self._closed:
            return
        self._closed = True

        if self._task is None:
            return

        stop: "asyncio.Future[Any]" = asyncio.get_running_loop().create_future()
        await self._queue.put(_Message(handler=None, future=stop))
        await self._task
        self._fail_pending()

    def _fail_pending(self) -> None:
        while True:
            try:
                message = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            if not message.future.done():
                message.future.set_exception(RuntimeError("Session actor is closed"))
            self._queue.task_done()


class SessionRegistry:
    """One SessionActor per user id, created on demand."""

    def __init__(self) -> None:
        self._actors: Dict[str, SessionActor] = {}

    def get(self, user_id: str) -> SessionActor:
        actor = self._actors.get(user_id)
        if actor is None:
            actor = SessionActor()
            self._actors[user_id] = actor
        return actor

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._actors

    async def sign_in(
        self,
        user_id: str,
        supabase_client: Client,
        access_token: str
    ) -> SessionState:
        return await self.get(user_id).notify_auth_event(
            AUTH_EVENT_SIGNED_IN, supabase_client, access_token
        )

    async def sign_out(self, user_id: str) -> None:
        actor = self._actors.pop(user_id, None)
        if actor is None:
            return
        await actor.notify_auth_event(AUTH_EVENT_SIGNED_OUT)
        await actor.close()


_session_registry: Optional[SessionRegistry] = None


def get_session_registry() -> SessionRegistry:
    """FastAPI dependency returning the process's SessionRegistry."""
    global _session_registry

    if _session_registry is None:
        _session_registry = SessionRegistry()

    return _session_registry
