"""Source (camera) to destination (display) coordinate mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .detection import Point, to_point


def mirror_x(x: float, dest_width: float) -> float:
    return dest_width - x


@dataclass(frozen=True)
class FrameGeometry:
    """
    Coordinate spaces of one frame.

    By default only horizontal mirroring and the fine-tune offsets are applied,
    which is what lines the overlay up with a mirrored front-camera preview.
    ``apply_scale`` additionally fits the source into the destination with an
    aspect-ratio preserving scale and centering offsets.
    """

    source_width: float
    source_height: float
    dest_width: float
    dest_height: float
    fine_tune_x: float = 0.0
    fine_tune_y: float = 10.0
    mirror: bool = True
    apply_scale: bool = False

    @classmethod
    def same_space(cls, width: float, height: float, **kwargs) -> "FrameGeometry":
        return cls(width, height, width, height, **kwargs)

    @property
    def renderable(self) -> bool:
        dims = (self.source_width, self.source_height, self.dest_width, self.dest_height)
        return all(np.isfinite(d) and d > 0 for d in dims)

    @property
    def scale(self) -> float:
        if not self.renderable:
            return 1.0
        return min(self.dest_width / self.source_width, self.dest_height / self.source_height)

    @property
    def offsets(self) -> Tuple[float, float]:
        s = self.scale
        return (
            (self.dest_width - self.source_width * s) / 2.0,
            (self.dest_height - self.source_height * s) / 2.0,
        )

    def map_array(self, pts: np.ndarray) -> np.ndarray:
        """Map an (N, 2) float array of source points to destination space."""
        out = np.array(pts, dtype=np.float64).reshape(-1, 2)
        if out.size == 0:
            return out
        if self.apply_scale:
            s = self.scale
            offset_x, offset_y = self.offsets
            out[:, 0] = out[:, 0] * s + offset_x
            out[:, 1] = out[:, 1] * s + offset_y
        if self.mirror:
            out[:, 0] = self.dest_width - out[:, 0]
        out[:, 0] += self.fine_tune_x
        out[:, 1] += self.fine_tune_y
        return out

    def map_points(self, points: Sequence[Point]) -> Tuple[Point, ...]:
        if not points:
            return ()
        mapped = self.map_array(np.asarray([to_point(p) for p in points], dtype=np.float64))
        return tuple(Point(float(x), float(y)) for x, y in mapped)
