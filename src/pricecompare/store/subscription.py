"""Realtime subscription to model price inserts.

A subscription is a lazy, infinite, non-restartable async stream of
``InsertEvent``s read from a Redis pub/sub channel. It is released
exactly once through ``unsubscribe()`` or by leaving its ``async with``
block.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator, Awaitable, Callable
from types import TracebackType
from typing import Any

import structlog
from pydantic import ValidationError
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pricecompare.cache import RedisClient
from pricecompare.config import RealtimeSettings

from .exceptions import DataAccessError
from .schemas import InsertEvent

logger = structlog.get_logger()

InsertHandler = Callable[[InsertEvent], Awaitable[None]]

_TRANSIENT_ERRORS = (RedisConnectionError, RedisTimeoutError)


class InsertSubscription:
    """Handle for an open insert notification channel.

    Without a handler the subscription is consumed with ``async for``. With a
    handler, a background task delivers every event to it; handler errors are
    logged and do not stop delivery.

    On connection loss the channel is re-opened with exponential backoff.
    Events published while disconnected are not replayed. When all attempts
    fail, the subscription closes and iteration raises ``DataAccessError``.
    """

    def __init__(
        self,
        redis_client: RedisClient,
        channel: str,
        settings: RealtimeSettings,
        on_insert: InsertHandler | None = None,
    ) -> None:
        """Initialize subscription (not yet opened).

        Args:
            redis_client: Connected Redis client
            channel: Pub/sub channel carrying insert events
            settings: Reconnect and polling settings
            on_insert: Optional async handler for callback delivery
        """
        self.channel = channel
        self._redis = redis_client
        self._settings = settings
        self._on_insert = on_insert
        self._pubsub: Any = None
        self._events: AsyncIterator[InsertEvent] | None = None
        self._dispatch_task: asyncio.Task[None] | None = None
        self._closed = False
        self._released = False
        self.failure: DataAccessError | None = None

    @property
    def closed(self) -> bool:
        """Whether delivery has stopped."""
        return self._closed

    async def open(self) -> None:
        """Subscribe to the channel and start callback delivery if configured."""
        await self._subscribe()
        if self._on_insert is not None:
            self._dispatch_task = asyncio.create_task(
                self._dispatch(self._on_insert),
                name=f"price-insert-dispatch:{self.channel}",
            )
        logger.info(
            "price_subscribed",
            channel=self.channel,
            callback=self._on_insert is not None,
        )

    def __aiter__(self) -> AsyncIterator[InsertEvent]:
        if self._on_insert is not None:
            raise RuntimeError("Subscription delivers events to its handler")
        if self._events is None:
            self._events = self._iterate()
        return self._events

    async def unsubscribe(self) -> None:
        """Stop delivery and release the channel."""
        if self._released:
            logger.debug("price_subscription_already_released", channel=self.channel)
            return
        self._released = True
        self._closed = True

        task = self._dispatch_task
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        await self._release_pubsub()
        logger.info("price_unsubscribed", channel=self.channel)

    async def __aenter__(self) -> InsertSubscription:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.unsubscribe()

    async def _subscribe(self) -> None:
        pubsub = self._redis.pubsub()
        try:
            await pubsub.subscribe(self.channel)
        except _TRANSIENT_ERRORS:
            await pubsub.aclose()
            raise
        self._pubsub = pubsub

    async def _release_pubsub(self) -> None:
        pubsub, self._pubsub = self._pubsub, None
        if pubsub is None:
            return
        try:
            await pubsub.unsubscribe(self.channel)
        except _TRANSIENT_ERRORS as e:
            logger.debug("price_unsubscribe_on_dead_connection", error=str(e))
        await pubsub.aclose()

    async def _reconnect(self) -> None:
        await self._release_pubsub()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.reconnect_attempts),
                wait=wait_exponential(
                    multiplier=1,
                    min=self._settings.reconnect_min_wait,
                    max=self._settings.reconnect_max_wait,
                ),
                retry=retry_if_exception_type(_TRANSIENT_ERRORS),
                reraise=True,
            ):
                with attempt:
                    await self._subscribe()
        except _TRANSIENT_ERRORS as e:
            self._closed = True
            self.failure = DataAccessError("subscribe", e)
            logger.error(
                "price_subscription_failed",
                channel=self.channel,
                attempts=self._settings.reconnect_attempts,
                error=str(e),
            )
            raise self.failure from e

        logger.info("price_subscription_reconnected", channel=self.channel)

    async def _iterate(self) -> AsyncIterator[InsertEvent]:
        while not self._closed:
            try:
                message = await self._pubsub.get_message(
                    ignore_subscribe_messages=True,
                    timeout=self._settings.poll_timeout,
                )
            except _TRANSIENT_ERRORS as e:
                if self._closed:
                    break
                logger.warning(
                    "price_subscription_connection_lost",
                    channel=self.channel,
                    error=str(e),
                )
                await self._reconnect()
                continue

            if message is None or message.get("type") != "message":
                continue

            try:
                event = InsertEvent.model_validate_json(message["data"])
            except ValidationError as e:
                logger.error("price_insert_event_invalid", channel=self.channel, error=str(e))
                continue

            yield event

    async def _dispatch(self, handler: InsertHandler) -> None:
        try:
            async for event in self._iterate():
                try:
                    await handler(event)
                except Exception as e:
                    logger.error(
                        "price_insert_handler_error",
                        model_name=event.record.model_name,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
        except DataAccessError:
            # Already logged and recorded on self.failure
            return
