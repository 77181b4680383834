import math

import numpy as np

# Ensure the local package is importable when running tests without installation
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mouth_overlay.assembler import assemble, group_points
from mouth_overlay.contours import GROUP_ORDER
from mouth_overlay.detection import DetectionResult, Face, Point


def _detection(**contours):
    return DetectionResult(faces=(Face(contours=contours),))


def test_zero_faces_gives_empty_contour():
    assert assemble(DetectionResult()) == ()
    assert assemble({"faces": []}) == ()
    assert assemble([]) == ()
    assert assemble(None) == ()


def test_missing_face_index_gives_empty_contour():
    det = _detection(LOWER_LIP_TOP={0: (1, 2)})
    assert assemble(det, GROUP_ORDER, face_index=1) == ()


def test_single_group_in_key_order():
    det = _detection(LOWER_LIP_TOP={2: (3, 3), 0: (1, 1), 1: (2, 2)})
    out = assemble(det)
    assert out == (Point(1, 1), Point(2, 2), Point(3, 3))


def test_numeric_string_keys_sort_numerically():
    group = {str(i): {"x": i, "y": 0} for i in (10, 2, 0, 1, 9)}
    xs = [p.x for p in group_points(group)]
    assert xs == [0, 1, 2, 9, 10]


def test_group_order_is_fixed():
    # Raw mapping lists the upper lip first; the lower lip must still lead.
    contours = {
        "UPPER_LIP_BOTTOM": {0: (20, 60), 1: (21, 61)},
        "LOWER_LIP_TOP": {0: (10, 50)},
    }
    out = assemble({"faces": [{"contours": contours}]})
    assert out == (Point(10, 50), Point(20, 60), Point(21, 61))


def test_length_is_sum_of_present_groups():
    det = _detection(
        LOWER_LIP_TOP={i: (i, i) for i in range(9)},
        UPPER_LIP_BOTTOM={i: (i, -i) for i in range(7)},
        NOSE_BRIDGE={0: (0, 0)},
    )
    assert len(assemble(det)) == 16
    assert len(assemble(det, ["UPPER_LIP_BOTTOM", "FACE"])) == 7


def test_accepts_landmark_objects_and_faces_attribute():
    class _Lm:
        def __init__(self, x, y):
            self.x, self.y = x, y

    class _Face:
        contours = {"LOWER_LIP_TOP": {0: _Lm(5, 6)}}

    class _Result:
        faces = [_Face()]

    assert assemble(_Result()) == (Point(5.0, 6.0),)
    assert assemble(_Face()) == (Point(5.0, 6.0),)


def test_unreadable_point_kept_as_nan():
    det = _detection(LOWER_LIP_TOP={0: (1, 2), 1: {"x": None, "y": 3}, 2: "bad"})
    out = assemble(det)
    assert len(out) == 3
    assert out[0] == Point(1.0, 2.0)
    assert math.isnan(out[1].x) and out[1].y == 3.0
    assert not out[2].is_finite()


def test_input_is_not_mutated():
    group = {1: (2, 2), 0: (1, 1)}
    det = _detection(LOWER_LIP_TOP=group)
    assemble(det)
    assert list(group.keys()) == [1, 0]


def test_list_groups_use_position_as_key():
    contours = {
        "LOWER_LIP_TOP": [{"x": 10, "y": 50}, {"x": 11, "y": 51}],
        "UPPER_LIP_BOTTOM": [{"x": 20, "y": 60}],
    }
    out = assemble({"faces": [{"contours": contours}]})
    assert out == (Point(10, 50), Point(11, 51), Point(20, 60))


def test_array_group():
    det = _detection(LOWER_LIP_TOP=np.array([[1.0, 2.0], [3.0, 4.0]]))
    assert assemble(det) == (Point(1.0, 2.0), Point(3.0, 4.0))


def test_fractional_keys_sort_by_value():
    xs = [p.x for p in group_points({1.9: (19, 0), 1.2: (12, 0), "0.5": (5, 0), 2: (20, 0)})]
    assert xs == [5, 12, 19, 20]


def test_non_numeric_keys_follow_numeric_ones():
    xs = [p.x for p in group_points({"b": (2, 0), "a": (1, 0), "3": (0, 0)})]
    assert xs == [0, 1, 2]
