"""Assemble the mouth contour from named contour groups of one frame."""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Sequence, Tuple

import numpy as np

from .contours import GROUP_ORDER
from .detection import Point, faces_of, to_point


def _key_order(key: Any) -> Tuple[int, Any]:
    # Numeric keys (numbers or "10"-style strings) sort numerically, before any others.
    if isinstance(key, int) and not isinstance(key, bool):
        return 0, key
    try:
        num = float(key)
    except (TypeError, ValueError):
        return 1, str(key)
    if math.isnan(num):
        return 1, str(key)
    return 0, num


def group_points(group: Any) -> List[Point]:
    """
    Return the points of one contour group in ascending key order.

    A list or array group is read as index to point, the way detectors that
    return each contour as an array of points lay it out.
    """
    if isinstance(group, np.ndarray) or (isinstance(group, Sequence) and not isinstance(group, (str, bytes))):
        group = dict(enumerate(group))
    if not isinstance(group, Mapping):
        return []
    return [to_point(group[k]) for k in sorted(group.keys(), key=_key_order)]


def assemble(
    detection: Any, group_order: Sequence[str] = GROUP_ORDER, face_index: int = 0
) -> Tuple[Point, ...]:
    """
    Concatenate the named contour groups of one face in ``group_order``.

    Missing faces or groups contribute nothing; the result is empty rather
    than an error so a missed detection never stalls the frame loop.
    """
    faces = faces_of(detection)
    if not 0 <= face_index < len(faces):
        return ()
    contours = faces[face_index].contours
    points: List[Point] = []
    for name in group_order:
        group = contours.get(name)
        if group is not None:
            points.extend(group_points(group))
    return tuple(points)
