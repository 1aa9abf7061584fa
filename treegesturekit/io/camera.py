from __future__ import annotations
import cv2, time
import numpy as np
from typing import Iterator, Tuple, Union

def frames(camera: Union[int,str]=0, width: int=640, height: int=480,
           mirror: bool=False) -> Iterator[Tuple[float, np.ndarray]]:
    """(monotonic capture time, BGR image) pairs until the source runs dry."""
    cap = cv2.VideoCapture(camera)
    if width:  cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    if height: cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    if not cap.isOpened():
        raise RuntimeError("Cannot open camera")
    try:
        while True:
            ok, image = cap.read()
            if not ok: break
            ts = time.monotonic()
            # mirroring is for the preview only, the hand features are left/right symmetric
            yield ts, (cv2.flip(image, 1) if mirror else image)
    finally:
        cap.release()
