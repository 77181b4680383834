"""
Detection result types and a MediaPipe FaceLandmarker adapter.

Detector output is treated as an opaque oracle: zero or more faces, each with
zero or more named contour groups keyed by index. The adapter degrades to a
result with no faces when MediaPipe or its model file is unavailable so the
per-frame pipeline keeps running.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence

import cv2
import numpy as np

from .contours import get_contours

try:
    import mediapipe as mp
    from mediapipe.tasks import python as mp_tasks
    from mediapipe.tasks.python import vision as mp_vision
except Exception:  # pragma: no cover - optional dependency
    mp = None

NAN = float("nan")


class Point(NamedTuple):
    x: float
    y: float

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True)
class Face:
    contours: Mapping[str, Mapping[Any, Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class DetectionResult:
    faces: Sequence[Face] = ()

    def __len__(self) -> int:
        return len(self.faces)


def _coord(value: Any) -> float:
    if value is None:
        return NAN
    try:
        return float(value)
    except (TypeError, ValueError):
        return NAN


def to_point(value: Any) -> Point:
    """Coerce a point-like value; unreadable values become Point(nan, nan)."""
    if isinstance(value, Mapping):
        return Point(_coord(value.get("x")), _coord(value.get("y")))
    if hasattr(value, "x") and hasattr(value, "y"):
        return Point(_coord(value.x), _coord(value.y))
    if isinstance(value, (Sequence, np.ndarray)) and not isinstance(value, (str, bytes)):
        if len(value) >= 2:
            return Point(_coord(value[0]), _coord(value[1]))
    return Point(NAN, NAN)


def _contours_of(face: Any) -> Mapping[str, Any]:
    if isinstance(face, Face):
        return face.contours
    if isinstance(face, Mapping):
        contours = face.get("contours", {})
    else:
        contours = getattr(face, "contours", {})
    return contours if isinstance(contours, Mapping) else {}


def to_face(value: Any) -> Face:
    return value if isinstance(value, Face) else Face(contours=_contours_of(value))


def faces_of(detection: Any) -> List[Face]:
    """
    Return the faces of a detection result.

    Accepts a DetectionResult, a dict with "faces" or "contours", an object
    with a ``faces`` attribute, a bare sequence of faces or a single face.
    Anything else counts as zero faces.
    """
    if detection is None:
        return []
    if isinstance(detection, DetectionResult):
        return list(detection.faces)
    if isinstance(detection, Face):
        return [detection]
    if isinstance(detection, Mapping):
        if "faces" in detection:
            faces = detection.get("faces") or []
        elif "contours" in detection:
            faces = [detection]
        else:
            return []
    elif hasattr(detection, "faces"):
        faces = detection.faces or []
    elif hasattr(detection, "contours"):
        faces = [detection]
    elif isinstance(detection, Sequence) and not isinstance(detection, (str, bytes)):
        faces = detection
    else:
        return []
    return [to_face(f) for f in faces]


def contours_from_landmarks(
    landmarks: Sequence[Any], width: int, height: int, mapping: Optional[Dict[str, List[int]]] = None
) -> Dict[str, Dict[int, Point]]:
    """Convert normalized FaceMesh landmarks to pixel-space contour groups."""
    mapping = mapping or get_contours()
    contours: Dict[str, Dict[int, Point]] = {}
    for name, idxs in mapping.items():
        group = {}
        for key, i in enumerate(idxs):
            if 0 <= i < len(landmarks):
                lm = landmarks[i]
                group[key] = Point(float(lm.x) * width, float(lm.y) * height)
        if group:
            contours[name] = group
    return contours


def _find_model(model_path: str | None) -> str | None:
    path = os.environ.get("FACE_LANDMARKER_MODEL") or model_path
    if path and os.path.isfile(path):
        return path
    return None


class ContourDetector:
    """
    MediaPipe FaceLandmarker wrapper returning named contour groups.

    ``detect`` takes a BGR frame and returns a DetectionResult with pixel
    coordinates in the frame's own space.
    """

    def __init__(self, model_path: str | None = "face_landmarker.task", num_faces: int = 1) -> None:
        self.model_path = _find_model(model_path)
        self._landmarker = None
        if mp is None:
            print("mediapipe is not installed; detections will be empty")
        elif self.model_path is None:
            print(f"could not find the face landmarker model at {model_path!r}; detections will be empty")
        else:
            options = mp_vision.FaceLandmarkerOptions(
                base_options=mp_tasks.BaseOptions(model_asset_path=self.model_path),
                num_faces=num_faces,
                min_face_detection_confidence=0.5,
                min_face_presence_confidence=0.5,
                min_tracking_confidence=0.5,
            )
            self._landmarker = mp_vision.FaceLandmarker.create_from_options(options)

    @property
    def available(self) -> bool:
        return self._landmarker is not None

    def detect(self, image_bgr: np.ndarray) -> DetectionResult:
        if self._landmarker is None:
            return DetectionResult()
        h, w = image_bgr.shape[:2]
        image_rgb = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
        result = self._landmarker.detect(mp.Image(image_format=mp.ImageFormat.SRGB, data=image_rgb))
        if not result.face_landmarks:
            return DetectionResult()
        faces = [Face(contours=contours_from_landmarks(lms, w, h)) for lms in result.face_landmarks]
        return DetectionResult(faces=tuple(faces))

    def close(self) -> None:
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None

    def __enter__(self) -> "ContourDetector":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
