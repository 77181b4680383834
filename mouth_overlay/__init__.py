"""
Mouth contour overlay for face-landmark detector output.
"""

__all__ = [
    "assembler",
    "canvas",
    "config",
    "contours",
    "detection",
    "geometry",
    "handoff",
    "overlay",
    "pipeline",
    "render",
]
