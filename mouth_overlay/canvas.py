"""Rasterize render results onto BGR frames with OpenCV."""

from __future__ import annotations

import numpy as np
import cv2

from .render import Color, RenderPath, RenderResult


def _bgr(color: Color) -> tuple:
    r, g, b = color
    return int(b), int(g), int(r)


def draw(image_bgr: np.ndarray, result: RenderResult) -> np.ndarray:
    """Draw a path or markers in place and return the image."""
    if result is None:
        return image_bgr
    if isinstance(result, RenderPath):
        pts = np.round(np.asarray(result.points, dtype=np.float64)).astype(np.int32).reshape(-1, 1, 2)
        thickness = max(1, int(round(result.stroke_width)))
        cv2.polylines(image_bgr, [pts], result.closed, _bgr(result.color), thickness, cv2.LINE_AA)
        return image_bgr
    for marker in result:
        center = (int(round(marker.center.x)), int(round(marker.center.y)))
        radius = max(1, int(round(marker.radius)))
        cv2.circle(image_bgr, center, radius, _bgr(marker.color), -1, cv2.LINE_AA)
    return image_bgr
