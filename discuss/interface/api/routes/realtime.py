"""Realtime comment event stream."""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from discuss.adapter.realtime import WebSocketBroadcaster

router = APIRouter(tags=["realtime"])


@router.websocket("/ws/comments")
@inject
async def comment_events(
    websocket: WebSocket,
    broadcaster: FromDishka[WebSocketBroadcaster],
) -> None:
    """Stream comment events to the client.

    Connect with: ws://host/ws/comments

    Messages received:
    - {"event": "comment:created", "data": {...}}
    - {"event": "comment:updated", "data": {...}}
    - {"event": "comment:deleted", "data": {"id": "..."}}
    - {"event": "comment:liked", "data": {...}}
    - {"event": "comment:disliked", "data": {...}}

    Anything the client sends is ignored.
    """
    await broadcaster.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(websocket)
