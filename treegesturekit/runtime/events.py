from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Optional, Literal
import asyncio, logging, websockets, time

logger = logging.getLogger(__name__)

class GestureEvent(BaseModel):
    ts: float = Field(default_factory=lambda: time.time())
    type: Literal["gesture"] = "gesture"
    gesture: str
    source: Literal["camera","manual"] = "camera"
    formation: str
    mode: str
    previous: str                  # mode before this event
    previous_formation: str
    targeted: Optional[str] = None

class Status(BaseModel):
    type: Literal["status"] = "status"
    formation: str
    mode: str
    gesture: str                   # raw label of the latest frame
    stable: str                    # last confirmed label
    targeted: Optional[str] = None

class ItemFrame(BaseModel):
    id: str
    category: str
    position: List[float]
    rotation: List[float]          # quaternion x, y, z, w
    scale: float
    targeted: bool = False
    lid_angle: float = 0.0
    paper_scale: float = 0.0
    paper_y: float = 0.0

class RenderFrame(BaseModel):
    ts: float = Field(default_factory=lambda: time.time())
    type: Literal["frame"] = "frame"
    items: List[ItemFrame] = []

async def ws_broadcast(queue: "asyncio.Queue[str]", host="0.0.0.0", port=8765):
    clients=set()
    async def handler(websocket):
        clients.add(websocket)
        try:
            await websocket.wait_closed()
        finally:
            clients.discard(websocket)
    async def pump():
        while True:
            msg = await queue.get()
            if clients:
                await asyncio.gather(*[c.send(msg) for c in list(clients)], return_exceptions=True)
    async with websockets.serve(handler, host, port):
        logger.info("broadcasting on ws://%s:%d", host, port)
        await pump()

def offer(queue: "asyncio.Queue[str]", msg: str) -> bool:
    """put_nowait that drops the oldest message when full; returns False if one was dropped."""
    try:
        queue.put_nowait(msg)
        return True
    except asyncio.QueueFull:
        queue.get_nowait()
        queue.put_nowait(msg)
        return False
