"""
Named lip contour groups and their MediaPipe FaceMesh landmark indices.

Group names follow the ML Kit contour naming used by mobile face detectors.
Each list runs in the same direction as the detector's own contour so that
concatenating LOWER_LIP_TOP then UPPER_LIP_BOTTOM walks once around the
inner mouth opening. Mouth corners (78, 308) belong to neither inner group.
"""

from __future__ import annotations

from typing import Dict, List

LOWER_LIP_TOP = "LOWER_LIP_TOP"
LOWER_LIP_BOTTOM = "LOWER_LIP_BOTTOM"
UPPER_LIP_TOP = "UPPER_LIP_TOP"
UPPER_LIP_BOTTOM = "UPPER_LIP_BOTTOM"

# Indices into the 468/478-point FaceMesh topology.
MEDIAPIPE_CONTOURS: Dict[str, List[int]] = {
    UPPER_LIP_TOP: [61, 185, 40, 39, 37, 0, 267, 269, 270, 409, 291],  # left to right
    UPPER_LIP_BOTTOM: [191, 80, 81, 82, 13, 312, 311, 310, 415],  # left to right
    LOWER_LIP_TOP: [324, 318, 402, 317, 14, 87, 178, 88, 95],  # right to left
    LOWER_LIP_BOTTOM: [375, 321, 405, 314, 17, 84, 181, 91, 146],  # right to left
}

GROUP_ORDER = [LOWER_LIP_TOP, UPPER_LIP_BOTTOM]


def get_contours() -> Dict[str, List[int]]:
    """Return mapping of contour group name to landmark indices."""
    return MEDIAPIPE_CONTOURS

