"""Per-frame pipeline: detection result to assembled contour to render result."""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import cv2
import numpy as np

from .assembler import assemble
from .canvas import draw
from .config import OverlayConfig
from .detection import ContourDetector, Point
from .geometry import FrameGeometry
from .handoff import LatestValue
from .render import RenderResult, render

logger = logging.getLogger(__name__)


class OverlayPipeline:
    """
    Holds the configuration built once up front and applies it to every frame.

    Each ``process`` call is independent. The only thing kept between frames is
    the last non-empty result, for display. ``latest`` is the slot a display
    thread reads from (``take``/``peek``); a newer result replaces one it has
    not picked up yet.
    """

    def __init__(self, config: Optional[OverlayConfig] = None, detector: Optional[Any] = None) -> None:
        self.config = config or OverlayConfig()
        self.style = self.config.overlay_style()
        self.detector = detector
        self.latest: LatestValue[RenderResult] = LatestValue()
        self.last_rendered: RenderResult = None
        self.last_contour: Tuple[Point, ...] = ()

    def process(self, detection: Any, geometry: Optional[FrameGeometry] = None) -> RenderResult:
        cfg = self.config
        geometry = geometry or cfg.geometry()
        contour = assemble(detection, cfg.group_order, cfg.face_index)
        result = render(contour, geometry, self.style)
        if result:
            self.last_contour = contour
            self.last_rendered = result
            self.latest.put(result)
        else:
            logger.debug("no mouth contour in frame")
        return result

    def frame_geometry(self, width: int, height: int) -> FrameGeometry:
        # Overlaying onto the frame itself: source and destination coincide.
        cfg = self.config
        return FrameGeometry.same_space(
            width,
            height,
            fine_tune_x=float(cfg.fine_tune_x),
            fine_tune_y=float(cfg.fine_tune_y),
            mirror=cfg.mirror_horizontally,
            apply_scale=cfg.apply_scale,
        )

    def annotate(self, image_bgr: np.ndarray, detection: Any = None) -> Tuple[np.ndarray, RenderResult]:
        """
        Detect (unless a detection is given), render and draw the overlay.

        When mapped points are mirrored, the overlay is drawn onto a mirrored copy
        of the frame, the way a front camera preview is shown; otherwise onto the
        frame itself.
        """
        if detection is None:
            if self.detector is None:
                self.detector = ContourDetector(self.config.model_path)
            detection = self.detector.detect(image_bgr)
        h, w = image_bgr.shape[:2]
        result = self.process(detection, self.frame_geometry(w, h))
        mapped = self.style.kind == "path" or self.style.map_markers
        view = cv2.flip(image_bgr, 1) if mapped and self.config.mirror_horizontally else image_bgr
        draw(view, result)
        return view, result

    def close(self) -> None:
        if self.detector is not None and hasattr(self.detector, "close"):
            self.detector.close()
