"""
Turn a JSON dump of raw detector output into overlay draw commands.

The dump is either one frame or a list of frames, each frame being
{"faces": [{"contours": {"LOWER_LIP_TOP": {"0": {"x": .., "y": ..}, ..}, ..}}]}.
One line of JSON draw commands is printed per frame.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mouth_overlay.config import OverlayConfig, load_config, merge_config  # noqa: E402
from mouth_overlay.pipeline import OverlayPipeline  # noqa: E402
from mouth_overlay.render import to_commands  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render detector JSON dumps to draw commands")
    parser.add_argument("dump", type=str, help="JSON file with one frame or a list of frames")
    parser.add_argument("--config", type=str, default=None, help="Path to config YAML")
    parser.add_argument("--style", type=str, choices=["marker", "path"], default=None)
    parser.add_argument("--fine_tune_y", type=float, default=None)
    parser.add_argument("--mirror_horizontally", type=str, default=None, help="true|false")
    parser.add_argument("--apply_scale", type=str, default=None, help="true|false")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    cfg = load_config(args.config) if args.config else {}
    config = OverlayConfig.from_dict(merge_config(cfg, args))
    with open(args.dump, "r", encoding="utf-8") as f:
        data = json.load(f)
    frames = data if isinstance(data, list) else [data]
    pipeline = OverlayPipeline(config)
    drawn = 0
    for frame in frames:
        cmds = to_commands(pipeline.process(frame))
        drawn += 1 if cmds else 0
        print(json.dumps([[c.op, *c.args] for c in cmds]))
    print(f"{drawn}/{len(frames)} frames with an overlay.", file=sys.stderr)


if __name__ == "__main__":
    main()
