from __future__ import annotations
import typer, asyncio, logging
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typing import List, Optional
from .config import load_config
from .runtime.controller import Controller
from .runtime.events import offer, ws_broadcast
from .scene.camera import viewer

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="TreeGestureKit CLI (tgk)")
# JSON lines must not be wrapped or highlighted
out = Console(soft_wrap=True, highlight=False, markup=False)

def _setup_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s",
                        datefmt="[%X]", handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)])

@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    _setup_logging(verbose)

@app.command()
def run(config: Optional[str] = typer.Option(None, help="YAML controller config"),
        ws: bool = typer.Option(False, help="Broadcast events and item frames over WebSocket"),
        port: int = 8765, queue_size: int = typer.Option(256, min=1, help="Pending WebSocket messages kept"),
        camera: Optional[int] = 0, width: int = 640, height: int = 480,
        preview: bool = typer.Option(False, help="Show the camera window with the raw label"),
        mirror: bool = False, mobile: bool = typer.Option(False, help="Use the narrow-screen viewer pose")):
    """
    Track one hand from the camera, print confirmed gesture events as JSONL.
    """
    import cv2
    from .hand.landmarks import HandLandmarks
    from .io.camera import frames

    ctl = Controller(load_config(config))
    hands = HandLandmarks()
    cam = viewer(mobile)

    async def producer(queue: "Optional[asyncio.Queue[str]]"):
        prev_ts = None
        try:
            for ts, image in frames(camera, width, height, mirror):
                ev = ctl.on_frame(hands(image))
                if ev is not None:
                    line = ev.model_dump_json(); out.print(line)
                    if queue is not None: offer(queue, line)
                dt = 0.0 if prev_ts is None else ts - prev_ts
                prev_ts = ts
                frame = ctl.tick(cam, dt)
                if queue is not None:
                    if not offer(queue, frame.model_dump_json()):
                        logger.debug("broadcast queue full, dropped oldest message")
                    # let the broadcaster drain between frames
                    await asyncio.sleep(0)
                if preview:
                    cv2.putText(image, ctl.raw.value, (10,30), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0,255,0), 2)
                    cv2.imshow("TreeGestureKit", image)
                    # press q to quit
                    if cv2.waitKey(1) & 0xFF == ord('q'):
                        break
        finally:
            hands.close()
            if preview: cv2.destroyAllWindows()

    async def main():
        if not ws:
            await producer(None)
            return
        queue: "asyncio.Queue[str]" = asyncio.Queue(maxsize=queue_size)
        prod = asyncio.create_task(producer(queue))
        bcast = asyncio.create_task(ws_broadcast(queue, "0.0.0.0", port))
        try:
            done, _ = await asyncio.wait({prod, bcast}, return_when=asyncio.FIRST_COMPLETED)
            # re-raise whichever side stopped first, e.g. the port already in use
            for task in done: task.result()
        finally:
            for task in (prod, bcast): task.cancel()
            await asyncio.gather(prod, bcast, return_exceptions=True)

    asyncio.run(main())

@app.command()
def simulate(labels: List[str] = typer.Argument(..., help="Raw per-frame labels, e.g. FIST FIST FIST"),
             config: Optional[str] = typer.Option(None),
             manual: bool = typer.Option(False, help="Inject labels as manual overrides"),
             ticks: int = typer.Option(0, help="Render ticks to run afterwards"),
             dt: float = 1/60, seed: Optional[int] = None,
             mobile: bool = typer.Option(False, help="Use the narrow-screen viewer pose")):
    """
    Feed labels through the pipeline without a camera and print what happens.
    """
    import numpy as np
    from .hand.gestures import Gesture

    cfg = load_config(config)
    ctl = Controller(cfg, rng=np.random.default_rng(seed if seed is not None else cfg.pool.seed))
    for raw in labels:
        label = Gesture.parse(raw)
        if manual:
            ev = ctl.inject(label)
        else:
            ev = ctl.on_label(label)
        if ev is not None: out.print(ev.model_dump_json())
    cam = viewer(mobile)
    frame = None
    for i in range(ticks):
        frame = ctl.tick(cam, dt, t=i*dt)
    if frame is not None and ctl.targeted:
        out.print(next(it for it in frame.items if it.id == ctl.targeted).model_dump_json())
    out.print(ctl.status().model_dump_json())

@app.command()
def pool(config: Optional[str] = typer.Option(None), seed: Optional[int] = None):
    """
    List the interactive items and their resting positions.
    """
    from .scene.items import build_pool
    import numpy as np
    cfg = load_config(config)
    items = build_pool(cfg.pool, np.random.default_rng(seed if seed is not None else cfg.pool.seed))
    t = Table("id", "category", "tree", "scatter", "content")
    fmt = lambda p: "(" + ", ".join(f"{v:.2f}" for v in p) + ")"
    for it in items:
        t.add_row(it.id, it.category, fmt(it.tree_position), fmt(it.scatter_position), it.content[:40])
    Console().print(t)

if __name__ == "__main__":
    app()
