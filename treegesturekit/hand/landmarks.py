from __future__ import annotations
import mediapipe as mp
import numpy as np
import cv2

class HandLandmarks:
    """MediaPipe hand tracker; returns at most one hand per frame, or None."""
    def __init__(self, max_hands=1, detection_conf=0.5, tracking_conf=0.5):
        self.hands = mp.solutions.hands.Hands(max_num_hands=max_hands, model_complexity=0,
                                              min_detection_confidence=detection_conf,
                                              min_tracking_confidence=tracking_conf)
    def __call__(self, frame_bgr):
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        res = self.hands.process(rgb)
        if not res.multi_hand_landmarks: return None
        lm, handed = res.multi_hand_landmarks[0], res.multi_handedness[0]
        pts = np.array([(p.x,p.y,p.z) for p in lm.landmark], dtype=float)
        return {"pts":pts, "handedness": handed.classification[0].label.lower()}
    def close(self):
        self.hands.close()
