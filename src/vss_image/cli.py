"""CLI entry point for generating and stacking visual secret shares."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .analysis import pattern_frequencies
from .config import VSSConfig
from .pipeline import share_image_file
from .preprocess import load_raster, save_raster
from .scheme.overlay import overlay

logger = logging.getLogger("vss_image")


def configure_logging(verbose: bool) -> None:
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="(2,2) visual secret sharing for black/white images.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    share = sub.add_parser("share", help="Split an image into two shares.")
    share.add_argument("image", type=Path, help="Input image (any format Pillow can read).")
    share.add_argument(
        "--out",
        type=Path,
        default=Path("output/shares"),
        help="Directory for shrunk/binary/share/overlay PNGs.",
    )
    share.add_argument("--threshold", type=float, help="Luma threshold; >= threshold becomes white.")
    share.add_argument("--max-width", type=int, help="Downscale (by powers of two) to this width.")
    share.add_argument("--max-height", type=int, help="Downscale (by powers of two) to this height.")
    share.add_argument("--seed", type=int, help="Seed for reproducible shares.")
    share.add_argument(
        "--transparent",
        action="store_true",
        default=None,
        help="Write white sub-pixels as transparent so shares stack in any viewer.",
    )
    share.add_argument("--workers", type=int, help="Encode in this many row bands in parallel.")
    share.add_argument("--figure", type=Path, help="Also save a matplotlib panel of every stage.")
    share.add_argument("--stats", type=Path, help="Write per-share pattern frequencies as CSV.")

    stack = sub.add_parser("stack", help="Overlay two share images (black wins).")
    stack.add_argument("first", type=Path)
    stack.add_argument("second", type=Path)
    stack.add_argument("--out", type=Path, default=Path("output/shares/stacked.png"))
    return parser


def run_share(args: argparse.Namespace) -> int:
    config = VSSConfig.from_env().with_overrides(
        threshold=args.threshold,
        max_width=args.max_width,
        max_height=args.max_height,
        transparent_white=args.transparent,
        workers=args.workers,
    )
    print(
        f"[CONFIG] threshold={config.threshold} max={config.max_width}x{config.max_height} "
        f"transparent={config.transparent_white} workers={config.workers}"
    )
    t0 = time.perf_counter()
    result = share_image_file(args.image, args.out, config, rng=args.seed)
    share = result.shares.first
    print(f"[SHARE] {args.image.name} -> {result.binary.width}x{result.binary.height} binary, {share.width}x{share.height} shares")
    for key, path in result.paths.items():
        print(f"[SAVE] {key:<8} {path}")
    if args.figure:
        from .figures import render_figure

        print(f"[FIGURE] {render_figure(result, args.figure)}")
    if args.stats:
        args.stats.parent.mkdir(parents=True, exist_ok=True)
        pattern_frequencies(result.shares, result.binary).to_csv(args.stats, index=False)
        print(f"[STATS] {args.stats}")
    print(f"[DONE] in {time.perf_counter() - t0:.3f}s")
    return 0


def run_stack(args: argparse.Namespace) -> int:
    stacked = overlay(load_raster(args.first), load_raster(args.second))
    print(f"[STACK] {args.first.name} + {args.second.name} -> {save_raster(stacked, args.out)}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    handlers = {"share": run_share, "stack": run_stack}
    try:
        return handlers[args.command](args)
    except (ValueError, OSError) as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1


__all__ = ["build_parser", "configure_logging", "main"]
