#!/usr/bin/env python3
# image_banner/cli.py
"""
Entry point for Image Banner.
Loads configuration, renders the image and prints the banner.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from image_banner.config import Config
from image_banner.errors import InvalidParameterError, ResourceNotFoundError
from image_banner.logging_conf import setup_logging
from image_banner.rendering.renderer import BannerRenderer
from image_banner.source import is_url, make_session
from image_banner.styles import print_banner
from image_banner.version import version_info

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-banner",
        description="Render an image as color-marked ASCII art for a console banner.",
    )
    parser.add_argument("image", nargs="?", help="Image path or http(s) URL (default: banner.image from config)")
    parser.add_argument("--max-width", type=int, help="Maximum banner width in characters")
    parser.add_argument("--aspect-ratio", type=float, help="Vertical correction for non-square console cells")
    invert = parser.add_mutually_exclusive_group()
    invert.add_argument("--invert", dest="invert", action="store_true", default=None,
                        help="Render for a dark console background")
    invert.add_argument("--no-invert", dest="invert", action="store_false", default=None,
                        help="Render for a light console background, overriding banner.invert")
    parser.add_argument("--raw", action="store_true", help="Print ${AnsiColor.*} markers instead of resolving them")
    parser.add_argument("--config", help="Path to JSON config file")
    parser.add_argument("--log-level", help="Override logging level (DEBUG, INFO, ...)")
    parser.add_argument("--version", action="version", version=version_info())
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config.load(args.config, create_if_missing=False, defer_warnings=True)
    setup_logging(cfg, args.log_level)
    for msg in cfg.load_warnings:
        log.warning("%s", msg)

    banner_cfg = cfg["banner"]
    image = args.image or banner_cfg["image"]
    max_width = args.max_width if args.max_width is not None else banner_cfg["max_width"]
    aspect_ratio = args.aspect_ratio if args.aspect_ratio is not None else banner_cfg["aspect_ratio"]
    invert = args.invert if args.invert is not None else banner_cfg["invert"]

    kwargs = {
        "resample": cfg["render"]["resample"],
        "max_image_pixels": cfg["render"]["max_image_pixels"],
    }
    if is_url(image):
        src = cfg["source"]
        kwargs.update(
            session=make_session(src["user_agent"], src["retries"]),
            connect_timeout=src["connect_timeout_s"],
            read_timeout=src["read_timeout_s"],
        )
    try:
        renderer = BannerRenderer(image, **kwargs)
        banner = renderer.render(max_width, aspect_ratio, invert)
    except (ResourceNotFoundError, InvalidParameterError) as exc:
        print(f"image-banner: {exc}", file=sys.stderr)
        return 2

    if not banner:
        return 1
    if args.raw:
        sys.stdout.write(banner)
    else:
        print_banner(banner)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
