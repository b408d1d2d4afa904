"""WebSocket fan-out of model price insert notifications."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

import structlog
from fastapi import WebSocket, WebSocketDisconnect

from pricecompare.store import InsertEvent

from ..schemas import WSMessage, WSMessageType

logger = structlog.get_logger()


@dataclass
class Connection:
    """Represents a WebSocket connection."""

    id: str
    websocket: WebSocket


@dataclass
class PriceFeedManager:
    """Tracks price feed connections and broadcasts insert notifications.

    Fed by the application's single insert subscription; clients re-fetch
    the price list when notified.
    """

    _connections: dict[str, Connection] = field(default_factory=dict)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def connect(self, websocket: WebSocket) -> Connection:
        """Accept a new WebSocket connection.

        Args:
            websocket: WebSocket connection

        Returns:
            Connection object
        """
        await websocket.accept()

        connection = Connection(id=str(uuid4()), websocket=websocket)
        async with self._lock:
            self._connections[connection.id] = connection

        logger.info("ws_connected", connection_id=connection.id)
        return connection

    async def disconnect(self, connection: Connection) -> None:
        """Forget a connection.

        Args:
            connection: Connection to remove
        """
        async with self._lock:
            removed = self._connections.pop(connection.id, None)

        if removed is not None:
            logger.info("ws_disconnected", connection_id=connection.id)

    async def send_message(self, connection: Connection, message: WSMessage) -> bool:
        """Send message to a specific connection.

        Args:
            connection: Target connection
            message: Message to send

        Returns:
            True if sent successfully
        """
        try:
            await connection.websocket.send_json(message.model_dump(mode="json"))
            return True
        except WebSocketDisconnect:
            await self.disconnect(connection)
            return False
        except Exception as e:
            logger.error(
                "ws_send_failed",
                connection_id=connection.id,
                error=str(e),
            )
            return False

    async def broadcast(self, message: WSMessage) -> int:
        """Send a message to every connection.

        Connections that fail are dropped.

        Args:
            message: Message to broadcast

        Returns:
            Number of connections the message was sent to
        """
        async with self._lock:
            connections = list(self._connections.values())

        if not connections:
            return 0

        sent_count = 0
        failed: list[Connection] = []
        for connection in connections:
            try:
                await connection.websocket.send_json(message.model_dump(mode="json"))
                sent_count += 1
            except WebSocketDisconnect:
                failed.append(connection)
            except Exception as e:
                logger.error(
                    "ws_broadcast_failed",
                    connection_id=connection.id,
                    error=str(e),
                )
                failed.append(connection)

        for connection in failed:
            await self.disconnect(connection)

        logger.debug(
            "ws_broadcast_complete",
            message_type=message.type,
            sent_count=sent_count,
            failed_count=len(failed),
        )
        return sent_count

    async def on_insert(self, event: InsertEvent) -> None:
        """Insert subscription handler: notify every client."""
        await self.broadcast(
            WSMessage(
                type=WSMessageType.PRICE_INSERTED,
                payload=event.model_dump(mode="json"),
            )
        )

    def get_total_connections(self) -> int:
        """Get total number of active connections."""
        return len(self._connections)

    async def handle_connection(self, websocket: WebSocket) -> None:
        """Serve one client until it disconnects.

        Answers ``ping`` with ``pong``; any other client message, including a
        frame that is not JSON, gets an error reply.

        Args:
            websocket: WebSocket connection
        """
        connection = await self.connect(websocket)
        await self.send_message(
            connection,
            WSMessage(type=WSMessageType.CONNECTED, payload={"connection_id": connection.id}),
        )
        try:
            while True:
                try:
                    data = await websocket.receive_json()
                    await self._handle_message(connection, data)
                except WebSocketDisconnect:
                    raise
                except Exception as e:
                    logger.error("ws_message_error", connection_id=connection.id, error=str(e))
                    await self.send_message(
                        connection,
                        WSMessage(type=WSMessageType.ERROR, payload={"error": str(e)}),
                    )
        except WebSocketDisconnect:
            pass
        finally:
            await self.disconnect(connection)

    async def _handle_message(self, connection: Connection, data: Any) -> None:
        message_type = data.get("type") if isinstance(data, dict) else None
        if message_type == WSMessageType.PING:
            reply = WSMessage(type=WSMessageType.PONG)
        else:
            reply = WSMessage(
                type=WSMessageType.ERROR,
                payload={"error": f"Unsupported message type: {message_type}"},
            )
        await self.send_message(connection, reply)
