"""
Overlay rendering: assembled contour to a closed path or to point markers.

Results are abstract draw instructions; rasterizing them is left to a display
surface (see ``canvas.draw``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

from .detection import Point, to_point
from .geometry import FrameGeometry

logger = logging.getLogger(__name__)

STYLES = ("marker", "path")

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class OverlayStyle:
    kind: str = "path"
    color: Color = (0, 128, 0)
    stroke_width: float = 6.0
    marker_radius: float = 6.0
    map_markers: bool = False


@dataclass(frozen=True)
class Marker:
    center: Point
    radius: float
    color: Color


@dataclass(frozen=True)
class RenderPath:
    start: Point
    line_to: Tuple[Point, ...]
    color: Color
    stroke_width: float
    closed: bool = True

    @property
    def points(self) -> Tuple[Point, ...]:
        return (self.start,) + self.line_to


class DrawCommand(NamedTuple):
    op: str
    args: Tuple[float, ...] = ()


RenderResult = Union[RenderPath, List[Marker], None]


def _valid(points: Sequence[Point]) -> List[Point]:
    valid = [p for p in map(to_point, points) if p.is_finite()]
    skipped = len(points) - len(valid)
    if skipped:
        logger.debug("skipped %d malformed point(s) of %d", skipped, len(points))
    return valid


def build_path(points: Sequence[Point], style: OverlayStyle) -> Optional[RenderPath]:
    """Closed polyline through ``points`` in order, or None when there is nothing to draw."""
    valid = _valid(points)
    if not valid:
        return None
    return RenderPath(
        start=valid[0],
        line_to=tuple(valid[1:]),
        color=style.color,
        stroke_width=style.stroke_width,
    )


def build_markers(points: Sequence[Point], style: OverlayStyle) -> List[Marker]:
    return [Marker(center=p, radius=style.marker_radius, color=style.color) for p in _valid(points)]


def render(
    points: Sequence[Point], geometry: Optional[FrameGeometry], style: OverlayStyle = OverlayStyle()
) -> RenderResult:
    """
    Render an assembled contour.

    Path style maps every point through ``geometry`` and returns a closed
    RenderPath, or None for "no path". Marker style returns one Marker per
    point, assumed to be in destination space already unless
    ``style.map_markers`` is set.

    Raises ValueError for a style kind other than "marker" or "path";
    OverlayConfig rejects such styles before any frame is rendered.
    """
    if style.kind == "marker":
        if style.map_markers and geometry is not None:
            if not geometry.renderable:
                return []
            points = geometry.map_points(points)
        return build_markers(points, style)
    if style.kind != "path":
        raise ValueError(f"Unknown overlay style {style.kind!r}; expected one of {STYLES}")
    if geometry is None or not geometry.renderable or not points:
        return None
    return build_path(geometry.map_points(points), style)


def to_commands(result: RenderResult) -> List[DrawCommand]:
    """Flatten a render result into move_to/line_to/close/circle commands."""
    if result is None:
        return []
    if isinstance(result, RenderPath):
        cmds = [DrawCommand("move_to", tuple(result.start))]
        cmds.extend(DrawCommand("line_to", tuple(p)) for p in result.line_to)
        if result.closed:
            cmds.append(DrawCommand("close"))
        return cmds
    return [DrawCommand("circle", (m.center.x, m.center.y, m.radius)) for m in result]
