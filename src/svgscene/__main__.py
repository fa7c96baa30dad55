"""
__main__.py
-----------

Command-line runner for the sample scenes.

    python -m svgscene clock                 # animate in a Matplotlib window
    python -m svgscene flower --svg          # print one frame as SVG
    python -m svgscene rain --fit stretch --size 800 400 --seed 7
"""

from __future__ import annotations

import sys
import math
import logging
import argparse
from typing import Optional, Sequence

import numpy as np

from .animation import AnimationDriver, FigureScheduler
from .canvas import Canvas
from .config import FIT_MODES, SceneConfig
from .demos import SCENES, InputState
from .logging_utils import LOGGER_NAME, configure_logging
from .viewport import StaticViewport


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="svgscene", description="Run an animated vector-graphics sample scene.")
    parser.add_argument("scene", choices=sorted(SCENES), help="Scene to run.")
    parser.add_argument("--svg", action="store_true", help="Print one rendered frame as SVG and exit.")
    parser.add_argument("--time", type=float, default=math.inf,
                        help="Elapsed milliseconds for the --svg frame (default: final state).")
    parser.add_argument("--fit", choices=FIT_MODES, default=None, help="Fit mode (default: per scene).")
    parser.add_argument("--size", type=int, nargs=2, default=(600, 600), metavar=("W", "H"),
                        help="Viewport size in pixels.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for randomized scenes.")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Console log level.")
    parser.add_argument("--log-dir", default=None, help="Also write a rotating log file here.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    builder, default_fit, background = SCENES[args.scene]
    config = SceneConfig(logger_level=getattr(logging, args.log_level), fit_mode=args.fit or default_fit)
    configure_logging(level=config.logger_level, log_dir=args.log_dir, run_prefix=args.scene)
    logger = logging.getLogger(LOGGER_NAME)

    rng = np.random.default_rng(args.seed)
    inputs = InputState()
    width, height = args.size

    if args.svg:
        canvas = Canvas(StaticViewport(width, height), config=config)
        nodes = builder(canvas, rng, inputs)
        AnimationDriver(*nodes).frame(args.time)
        sys.stdout.write(canvas.to_svg() + "\n")
        return 0

    import matplotlib.pyplot as plt
    from .mpl_render import render_canvas

    fig = plt.figure(figsize=(width / 100, height / 100), dpi=100, facecolor=background)
    ax = fig.add_axes((0, 0, 1, 1))
    canvas = Canvas(fig, config=config)
    nodes = builder(canvas, rng, inputs)
    inputs.bind_figure(fig, canvas)
    render_canvas(canvas, ax)

    scheduler = FigureScheduler(fig, config.frame_interval_ms, redraw=lambda: render_canvas(canvas, ax))
    driver = AnimationDriver(*nodes, scheduler=scheduler)
    driver.start()
    logger.info(f"Showing scene '{args.scene}' ({canvas.fit_mode.value}); close the window to exit")
    try:
        plt.show()
    finally:
        driver.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
