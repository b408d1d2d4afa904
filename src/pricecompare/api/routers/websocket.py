"""WebSocket endpoint for realtime price notifications."""

from fastapi import APIRouter, WebSocket

from ..dependencies import FeedManager

router = APIRouter(tags=["websocket"])


@router.websocket("/ws/prices")
async def price_feed(websocket: WebSocket, manager: FeedManager) -> None:
    """Stream model price insert notifications.

    Message Types (Client -> Server):
        - ping: Keep-alive ping

    Message Types (Server -> Client):
        - connected: Connection accepted
        - pong: Keep-alive response
        - price_inserted: A new model was added; re-fetch the price list
        - error: Unsupported client message

    Args:
        websocket: WebSocket connection
        manager: Price feed manager
    """
    await manager.handle_connection(websocket)
