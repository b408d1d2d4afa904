"""Data access for model prices.

Wraps the repository with single-shot operations that translate backend
failures into store errors, and publishes insert notifications on the
realtime channel.
"""

from __future__ import annotations

import structlog
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from pricecompare.cache import RedisClient
from pricecompare.config import RealtimeSettings
from pricecompare.db import DatabaseSessionManager, ModelPriceRepository

from .exceptions import DataAccessError, EmptyResultError
from .schemas import InsertEvent, ModelPriceInput, ModelPriceRecord
from .subscription import InsertHandler, InsertSubscription

logger = structlog.get_logger()

_BACKEND_ERRORS = (SQLAlchemyError, OSError)


class PriceStore:
    """CRUD and realtime access to the model price table.

    No operation retries; failures propagate to the caller. Concurrent
    upserts to the same name race and the last write wins.
    """

    def __init__(
        self,
        db: DatabaseSessionManager,
        redis_client: RedisClient,
        channel: str,
        realtime_settings: RealtimeSettings,
    ) -> None:
        """Initialize price store.

        Args:
            db: Database session manager
            redis_client: Connected Redis client
            channel: Pub/sub channel for insert notifications
            realtime_settings: Subscription reconnect settings
        """
        self._db = db
        self._redis = redis_client
        self.channel = channel
        self._realtime_settings = realtime_settings

    async def list_all(self) -> list[ModelPriceRecord]:
        """Fetch the full record set in insertion order.

        Returns:
            Freshly fetched model price records

        Raises:
            DataAccessError: If the backend call fails
        """
        try:
            async with self._db.session() as session:
                rows = await ModelPriceRepository(session).get_all_model_prices()
                records = [ModelPriceRecord.model_validate(row) for row in rows]
        except _BACKEND_ERRORS as e:
            logger.error("price_list_failed", error=str(e), error_type=type(e).__name__)
            raise DataAccessError("list_all", e) from e

        logger.debug("prices_listed", count=len(records))
        return records

    async def upsert(self, record: ModelPriceInput) -> ModelPriceRecord:
        """Insert a record or replace the one with the same name.

        Publishes an insert notification when the name did not exist.

        Args:
            record: Model price to write

        Returns:
            The upserted record

        Raises:
            DataAccessError: If the backend call fails
            EmptyResultError: If the backend returned no row
        """
        try:
            async with self._db.session() as session:
                repo = ModelPriceRepository(session)
                existed = await repo.get_by_name(record.name) is not None
                row = await repo.upsert_model_price(
                    p_model_name=record.name,
                    p_input_price=record.input,
                    p_output_price=record.output,
                    p_provider=record.provider,
                )
                if row is None:
                    raise EmptyResultError("upsert")
                result = ModelPriceRecord.model_validate(row)
                await session.commit()
        except _BACKEND_ERRORS as e:
            logger.error(
                "price_upsert_failed",
                model_name=record.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DataAccessError("upsert", e) from e

        logger.info(
            "price_upserted",
            model_name=result.model_name,
            provider=result.provider,
            inserted=not existed,
        )

        if not existed:
            await self._publish_insert(result)
        return result

    async def subscribe_to_inserts(
        self,
        on_insert: InsertHandler | None = None,
    ) -> InsertSubscription:
        """Open the insert notification channel.

        Only inserts published after this call are delivered.

        Args:
            on_insert: Optional async handler; without one, iterate the
                returned subscription

        Returns:
            Open subscription; release it with ``unsubscribe()``

        Raises:
            DataAccessError: If the channel cannot be opened
        """
        subscription = InsertSubscription(
            redis_client=self._redis,
            channel=self.channel,
            settings=self._realtime_settings,
            on_insert=on_insert,
        )
        try:
            await subscription.open()
        except RedisError as e:
            logger.error("price_subscribe_failed", channel=self.channel, error=str(e))
            raise DataAccessError("subscribe", e) from e
        return subscription

    async def _publish_insert(self, record: ModelPriceRecord) -> None:
        event = InsertEvent(record=record)
        try:
            receivers = await self._redis.publish(self.channel, event.model_dump_json())
        except RedisError as e:
            # The row is committed; subscribers catch up on their next list_all
            logger.error(
                "price_insert_publish_failed",
                model_name=record.model_name,
                error=str(e),
            )
            return
        logger.debug(
            "price_insert_published",
            model_name=record.model_name,
            receivers=receivers,
        )
