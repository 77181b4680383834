"""Overlay configuration: YAML file, command-line overrides and validation."""

from __future__ import annotations

import argparse
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from .contours import GROUP_ORDER
from .geometry import FrameGeometry
from .render import STYLES, Color, OverlayStyle

NAMED_COLORS: Dict[str, Color] = {
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "red": (255, 0, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "white": (255, 255, 255),
    "black": (0, 0, 0),
    "magenta": (255, 0, 255),
    "cyan": (0, 255, 255),
}


def str2bool(v: str) -> bool:
    return v.lower() in ("1", "true", "yes", "y")


def parse_color(value: Any) -> Color:
    """Accept a color name, "#rrggbb" or an [r, g, b] list."""
    if isinstance(value, str):
        name = value.strip().lower()
        if name in NAMED_COLORS:
            return NAMED_COLORS[name]
        if name.startswith("#") and len(name) == 7:
            try:
                return tuple(int(name[i : i + 2], 16) for i in (1, 3, 5))  # type: ignore[return-value]
            except ValueError:
                pass
        raise ValueError(f"Unknown color {value!r}")
    if isinstance(value, (list, tuple)) and len(value) == 3:
        rgb = tuple(int(c) for c in value)
        if all(0 <= c <= 255 for c in rgb):
            return rgb  # type: ignore[return-value]
    raise ValueError(f"Color must be a name, '#rrggbb' or three 0-255 values, got {value!r}")


@dataclass
class OverlayConfig:
    group_order: List[str] = field(default_factory=lambda: list(GROUP_ORDER))
    style: str = "path"
    marker_radius: float = 6.0
    stroke_width: float = 6.0
    color: Color = (0, 128, 0)
    fine_tune_x: float = 0.0
    fine_tune_y: float = 10.0
    mirror_horizontally: bool = True
    apply_scale: bool = False
    map_markers: bool = False
    face_index: int = 0
    camera_width: int = 1920
    camera_height: int = 1080
    display_width: Optional[int] = None
    display_height: Optional[int] = None
    model_path: str = "face_landmarker.task"

    @classmethod
    def from_dict(cls, cfg: Optional[Dict[str, Any]]) -> "OverlayConfig":
        cfg = dict(cfg or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        if "color" in cfg:
            cfg["color"] = parse_color(cfg["color"])
        if "group_order" in cfg:
            order = cfg["group_order"]
            if isinstance(order, str):
                order = [s.strip() for s in order.split(",") if s.strip()]
            cfg["group_order"] = list(order or [])
        config = cls(**cfg)
        config.validate()
        return config

    def validate(self) -> None:
        if self.style not in STYLES:
            raise ValueError(f"style must be one of {STYLES}, got {self.style!r}")
        if not self.group_order or not all(isinstance(g, str) and g for g in self.group_order):
            raise ValueError("group_order must be a non-empty list of contour group names")
        for key in ("marker_radius", "stroke_width", "camera_width", "camera_height"):
            if getattr(self, key) <= 0:
                raise ValueError(f"{key} must be positive")
        for key in ("display_width", "display_height"):
            val = getattr(self, key)
            if val is not None and val <= 0:
                raise ValueError(f"{key} must be positive")
        if self.face_index < 0:
            raise ValueError("face_index must be >= 0")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def overlay_style(self) -> OverlayStyle:
        return OverlayStyle(
            kind=self.style,
            color=self.color,
            stroke_width=float(self.stroke_width),
            marker_radius=float(self.marker_radius),
            map_markers=self.map_markers,
        )

    def geometry(self, source_width: Optional[float] = None, source_height: Optional[float] = None) -> FrameGeometry:
        """Frame geometry for a source of the given size, defaulting to the camera format."""
        src_w = source_width or self.camera_width
        src_h = source_height or self.camera_height
        return FrameGeometry(
            source_width=src_w,
            source_height=src_h,
            dest_width=self.display_width or src_w,
            dest_height=self.display_height or src_h,
            fine_tune_x=float(self.fine_tune_x),
            fine_tune_y=float(self.fine_tune_y),
            mirror=self.mirror_horizontally,
            apply_scale=self.apply_scale,
        )


def load_config(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def merge_config(cfg: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    cfg = dict(cfg)
    for key in ["style", "color", "fine_tune_x", "fine_tune_y", "model_path", "group_order"]:
        val = getattr(args, key, None)
        if val is not None:
            cfg[key] = val
    for key in ["mirror_horizontally", "apply_scale"]:
        val = getattr(args, key, None)
        if val is not None:
            cfg[key] = str2bool(val)
    return cfg
