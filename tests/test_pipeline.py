import numpy as np

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mouth_overlay.canvas import draw
from mouth_overlay.config import OverlayConfig
from mouth_overlay.detection import DetectionResult, Face, Point
from mouth_overlay.geometry import FrameGeometry
from mouth_overlay.pipeline import OverlayPipeline
from mouth_overlay.render import Marker, OverlayStyle, RenderPath, render


def _mouth(cx=50.0, cy=50.0):
    lower = {i: (cx + 10 - 5 * i, cy + 4) for i in range(5)}
    upper = {i: (cx - 10 + 5 * i, cy - 4) for i in range(5)}
    return DetectionResult(faces=(Face(contours={"LOWER_LIP_TOP": lower, "UPPER_LIP_BOTTOM": upper}),))


class _FakeDetector:
    def __init__(self, results):
        self.results = list(results)
        self.closed = False

    def detect(self, image_bgr):
        return self.results.pop(0)

    def close(self):
        self.closed = True


def test_process_publishes_last_result():
    pipe = OverlayPipeline(OverlayConfig())
    geom = FrameGeometry.same_space(100, 100)
    first = pipe.process(_mouth(), geom)
    assert isinstance(first, RenderPath)
    assert len(first.points) == 10
    assert pipe.latest.take() is first

    # An empty frame neither clears the display state nor publishes anything.
    assert pipe.process(DetectionResult(), geom) is None
    assert pipe.last_rendered is first
    assert pipe.latest.take() is None


def test_frames_are_independent():
    pipe = OverlayPipeline(OverlayConfig(fine_tune_y=0, mirror_horizontally=False))
    geom = FrameGeometry.same_space(100, 100, fine_tune_y=0, mirror=False)
    a = pipe.process(_mouth(50, 50), geom)
    pipe.process(DetectionResult(), geom)
    b = pipe.process(_mouth(50, 50), geom)
    assert a == b
    assert pipe.last_contour[0] == Point(60, 54)


def test_annotate_draws_on_mirrored_view():
    detector = _FakeDetector([_mouth(30, 40)])
    pipe = OverlayPipeline(OverlayConfig(stroke_width=2, color=(255, 0, 0)), detector=detector)
    frame = np.zeros((100, 120, 3), dtype=np.uint8)
    view, result = pipe.annotate(frame)
    assert isinstance(result, RenderPath)
    assert view.shape == frame.shape
    assert not frame.any()  # source frame untouched, overlay drawn on the mirrored copy
    ys, xs = np.nonzero(view[:, :, 2])
    assert xs.min() >= 120 - 45 and xs.max() <= 120 - 15
    assert ys.min() >= 40 and ys.max() <= 60
    assert view[:, :, 0].max() == 0
    pipe.close()
    assert detector.closed


def test_annotate_without_face_leaves_frame_blank():
    pipe = OverlayPipeline(OverlayConfig(), detector=_FakeDetector([DetectionResult()]))
    frame = np.zeros((50, 50, 3), dtype=np.uint8)
    view, result = pipe.annotate(frame)
    assert result is None
    assert not view.any()


def test_annotate_markers_on_raw_frame():
    cfg = OverlayConfig(style="marker", marker_radius=2, color=(0, 255, 0))
    pipe = OverlayPipeline(cfg, detector=_FakeDetector([{"faces": [{"contours": {"LOWER_LIP_TOP": {0: (10, 10)}}}]}]))
    frame = np.zeros((40, 40, 3), dtype=np.uint8)
    view, result = pipe.annotate(frame)
    assert result == [Marker(Point(10, 10), 2.0, (0, 255, 0))]
    assert view is frame
    assert frame[10, 10, 1] == 255
    assert frame[30, 30].sum() == 0


def test_draw_none_and_empty_are_no_ops():
    img = np.zeros((20, 20, 3), dtype=np.uint8)
    draw(img, None)
    draw(img, [])
    assert not img.any()
    draw(img, render([(5, 5)], None, OverlayStyle(kind="marker", marker_radius=1)))
    assert img.any()
