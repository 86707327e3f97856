from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import orjson

from pixelmatch.compare import compare
from pixelmatch.config import resolve_config
from pixelmatch.exceptions import ImageDecodeError, PixelMatchError
from pixelmatch.image_io import load_raw_image, save_raw_image
from pixelmatch.types import RGB

logger = logging.getLogger(__name__)


def _parse_rgb(value: str) -> RGB:
    parts = value.split(",")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected R,G,B but got {value!r}")
    try:
        r, g, b = (int(part.strip()) for part in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected integer channels but got {value!r}"
        ) from None
    return RGB(r, g, b)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixelmatch",
        usage="%(prog)s [options...] <expected> <actual>",
        description="Pixel-level comparison of two images of the same size.",
    )
    parser.add_argument("expected", help="Baseline image")
    parser.add_argument("actual", help="Image to compare against the baseline")
    parser.add_argument("--output", default="", help="File to output the diff to")
    parser.add_argument(
        "--threshold", type=float, default=0.1, help="Sensitivity of diff [0, 1]"
    )
    parser.add_argument(
        "--include-anti-aliasing",
        dest="detect_anti_aliasing",
        action="store_true",
        help="Do anti-aliasing detection",
    )
    parser.add_argument(
        "--alpha", type=float, help="Opacity of the original image in the diff [0, 1]"
    )
    parser.add_argument(
        "--aa-color", dest="anti_alias_color", type=_parse_rgb, help="Anti-aliased pixel colour"
    )
    parser.add_argument("--diff-color", type=_parse_rgb, help="Different pixel colour")
    parser.add_argument(
        "--diff-color-alt",
        type=_parse_rgb,
        help="Colour for pixels that are darker in the expected image",
    )
    parser.add_argument(
        "--diff-mask",
        action="store_true",
        help="Only draw different pixels, leave the rest transparent",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    options = {
        "threshold": args.threshold,
        "detect_anti_aliasing": args.detect_anti_aliasing,
        "alpha": args.alpha,
        "anti_alias_color": args.anti_alias_color,
        "diff_color": args.diff_color,
        "diff_color_alt": args.diff_color_alt,
        "diff_mask": args.diff_mask,
    }

    try:
        # flags that were not given keep the Config defaults
        config = resolve_config(
            **{key: value for key, value in options.items() if value is not None}
        )
    except PixelMatchError as e:
        print(f"Invalid options: {e}", file=sys.stderr)
        return 1

    try:
        expected = load_raw_image(args.expected)
        actual = load_raw_image(args.actual)
    except ImageDecodeError as e:
        print(f"Failed to read {e.source}: {e.reason}", file=sys.stderr)
        return 1

    try:
        result = compare(expected, actual, config)
    except PixelMatchError as e:
        print(f"Failed to compare {args.expected} and {args.actual}: {e}", file=sys.stderr)
        return 1

    if args.output:
        try:
            save_raw_image(result.diff_image, args.output)
        except OSError as e:
            print(f"Failed to write diff to {args.output}: {e}", file=sys.stderr)
            return 1
        logger.debug("pixelmatch.cli.wrote_diff", extra={"output": args.output})

    if args.json:
        payload = {
            "expected": args.expected,
            "actual": args.actual,
            "different_pixels": result.different_pixels,
            "total_pixels": result.total_pixels,
            "diff_ratio": result.diff_ratio,
            "output": args.output or None,
        }
        sys.stdout.write(orjson.dumps(payload).decode() + "\n")
    elif not args.output:
        print(
            f"There are {result.different_pixels} pixels different between "
            f"{args.expected} and {args.actual}"
        )

    return 0
