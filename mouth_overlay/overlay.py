"""Command-line mouth contour overlay for image and video files."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

import cv2
from tqdm import tqdm

from .config import OverlayConfig, load_config, merge_config
from .pipeline import OverlayPipeline

IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".bmp", ".webp"}


def overlay_image(pipeline: OverlayPipeline, in_path: str, out_path: str) -> bool:
    image = cv2.imread(in_path)
    if image is None:
        print(f"No Device: could not read image {in_path}")
        return False
    view, result = pipeline.annotate(image)
    if not result:
        print("No mouth contour detected.")
    os.makedirs(os.path.dirname(os.path.abspath(out_path)), exist_ok=True)
    try:
        written = cv2.imwrite(out_path, view)
    except cv2.error as e:
        print(f"Could not write image {out_path}: {e}")
        return False
    if not written:
        print(f"Could not write image {out_path}")
        return False
    print(f"Wrote {out_path}")
    return True


def overlay_video(pipeline: OverlayPipeline, in_path: str, out_path: str) -> bool:
    cap = cv2.VideoCapture(in_path)
    if not cap.isOpened():
        print(f"No Device: could not open video {in_path}")
        return False
    fps = cap.get(cv2.CAP_PROP_FPS) or 30.0
    width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
    height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
    total = int(cap.get(cv2.CAP_PROP_FRAME_COUNT)) or None
    if width <= 0 or height <= 0:
        cap.release()
        print(f"No Device: video {in_path} reports no frame size")
        return False
    os.makedirs(os.path.dirname(os.path.abspath(out_path)), exist_ok=True)
    try:
        writer = cv2.VideoWriter(out_path, cv2.VideoWriter_fourcc(*"mp4v"), fps, (width, height))
    except cv2.error as e:
        cap.release()
        print(f"Could not open video writer for {out_path}: {e}")
        return False
    if not writer.isOpened():
        cap.release()
        print(f"Could not open video writer for {out_path}")
        return False
    frames = hits = 0
    try:
        with tqdm(total=total, desc="Overlay", leave=False) as bar:
            while True:
                ok, frame = cap.read()
                if not ok:
                    break
                view, result = pipeline.annotate(frame)
                writer.write(view)
                frames += 1
                hits += 1 if result else 0
                bar.update(1)
    finally:
        cap.release()
        writer.release()
    print(f"Wrote {out_path}: {frames} frames, mouth contour in {hits}.")
    return True


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Overlay the mouth contour on images or videos")
    parser.add_argument("--input", type=str, required=True, help="Image or video file")
    parser.add_argument("--output", type=str, required=True, help="Output image or video file")
    parser.add_argument("--config", type=str, default=None, help="Path to config YAML")
    parser.add_argument("--style", type=str, choices=["marker", "path"], default=None)
    parser.add_argument("--color", type=str, default=None, help="Color name or #rrggbb")
    parser.add_argument("--group_order", type=str, default=None, help="Comma-separated contour groups")
    parser.add_argument("--fine_tune_x", type=float, default=None)
    parser.add_argument("--fine_tune_y", type=float, default=None)
    parser.add_argument("--mirror_horizontally", type=str, default=None, help="true|false")
    parser.add_argument("--apply_scale", type=str, default=None, help="true|false")
    parser.add_argument("--model_path", type=str, default=None, help="FaceLandmarker .task model")
    parser.add_argument("--verbose", action="store_true", help="Log per-frame details")
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    cfg = load_config(args.config) if args.config else {}
    config = OverlayConfig.from_dict(merge_config(cfg, args))
    pipeline = OverlayPipeline(config)
    try:
        ext = os.path.splitext(args.input)[1].lower()
        if ext in IMAGE_EXTS:
            ok = overlay_image(pipeline, args.input, args.output)
        else:
            ok = overlay_video(pipeline, args.input, args.output)
    finally:
        pipeline.close()
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
