# -*- coding: utf-8 -*-
"""
src/fontpair/cli.py

Command line entry point for FontPair.

    fontpair analyze HEADING.ttf BODY.otf [ACCENT.woff2] [--json] [--copy]
    fontpair rank ~/fonts --top 10
    fontpair serve --port 8080
"""

import argparse
import itertools
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import config
from .core.analysis import analyze_fonts
from .core.compatibility import PairResult, TrioResult, compatibility_score, rate_score
from .core.feature_extractor import FontMetrics, extract_font_metrics
from .exceptions import FontLoadError, FontPairError
from .providers import available_providers, get_provider
from .utils.clipboard_manager import copy_to_clipboard
from .utils.font_paths import find_font_files, get_system_font_dirs

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _format_metrics(label: str, name: str, metrics: FontMetrics) -> List[str]:
    contrast = f"{metrics.stroke_contrast:.2f}" if metrics.stroke_contrast is not None else "n/a"
    return [
        f"{label}: {name}",
        f"  x-height {metrics.x_height:.3f}   cap-height {metrics.cap_height:.3f}   "
        f"contrast {contrast}   avg width {metrics.avg_char_width:.3f}",
    ]


def format_report(result, names: Sequence[str]) -> str:
    """Plain-text summary of a PairResult or TrioResult."""
    lines: List[str] = []
    lines += _format_metrics("Font A", names[0], result.font_a)
    lines += _format_metrics("Font B", names[1], result.font_b)

    if isinstance(result, PairResult):
        score = result.compatibility_score
        lines.append("")
        lines.append(f"Compatibility: {score:.2f} ({rate_score(score)})")
    elif isinstance(result, TrioResult):
        lines += _format_metrics("Font C", names[2], result.font_c)
        scores = result.scores
        lines.append("")
        lines.append(f"A/B: {scores.ab:.2f}   A/C: {scores.ac:.2f}   B/C: {scores.bc:.2f}")
        lines.append(f"Overall: {scores.overall:.2f} ({rate_score(scores.overall)})")
        lines.append(
            f"Triangle: area {result.triangle.area:.4f}   perimeter {result.triangle.perimeter:.4f}"
        )
    return "\n".join(lines)


def cmd_analyze(args) -> int:
    provider = get_provider(args.backend or config.backend)
    paths = [Path(p) for p in args.fonts]
    try:
        fonts = [path.read_bytes() for path in paths]
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        result = analyze_fonts(fonts, provider, config.analysis_settings, config.scoring_weights)
    except FontPairError as e:
        logger.error(f"Analysis failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    payload = json.dumps(result.to_dict(), indent=2)
    if args.json:
        print(payload)
    else:
        print(format_report(result, [path.name for path in paths]))
    if args.copy and not copy_to_clipboard(payload):
        print("Warning: could not copy the result to the clipboard.", file=sys.stderr)
    return 0


def cmd_rank(args) -> int:
    provider = get_provider(args.backend or config.backend)
    settings = config.analysis_settings
    weights = config.scoring_weights
    directories = [Path(d) for d in args.directories] or get_system_font_dirs()
    top_n = args.top if args.top is not None else config.results_count

    measured = []
    for path in find_font_files(*directories):
        try:
            measured.append((path, extract_font_metrics(path.read_bytes(), provider, settings)))
        except (FontLoadError, OSError) as e:
            logger.warning(f"Skipping {path.name}: {e}")

    if len(measured) < 2:
        print("Error: need at least two loadable fonts to rank pairs.", file=sys.stderr)
        return 1

    pairs = [
        (compatibility_score(ma, mb, weights), pa, pb)
        for (pa, ma), (pb, mb) in itertools.combinations(measured, 2)
    ]
    pairs.sort(key=lambda item: item[0], reverse=True)

    print(f"Top {min(top_n, len(pairs))} of {len(pairs)} pairs from {len(measured)} fonts:")
    for rank, (score, pa, pb) in enumerate(pairs[:top_n], start=1):
        print(f"{rank:3d}. {score:.3f}  {pa.name} + {pb.name}  ({rate_score(score)})")
    return 0


def cmd_serve(args) -> int:
    from .app import create_app

    app = create_app(get_provider(args.backend or config.backend))
    app.run(host=args.host or config.host, port=args.port or config.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fontpair",
        description="Measure fonts and score how well they pair.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument(
        "--backend",
        choices=available_providers(),
        help=f"glyph outline backend (default: {config.backend})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="score two or three font files")
    analyze.add_argument("fonts", nargs="+", metavar="FONT", help="font A, font B and optionally font C")
    analyze.add_argument("--json", action="store_true", help="print the JSON result")
    analyze.add_argument("--copy", action="store_true", help="copy the JSON result to the clipboard")
    analyze.set_defaults(func=cmd_analyze)

    rank = subparsers.add_parser("rank", help="rank every pair of fonts found in directories")
    rank.add_argument("directories", nargs="*", metavar="DIR", help="defaults to the system font directories")
    rank.add_argument("--top", type=int, help=f"pairs to show (default: {config.results_count})")
    rank.set_defaults(func=cmd_rank)

    serve = subparsers.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", help=f"bind address (default: {config.host})")
    serve.add_argument("--port", type=int, help=f"port (default: {config.port})")
    serve.set_defaults(func=cmd_serve)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "analyze" and not 2 <= len(args.fonts) <= 3:
        parser.error("analyze takes two or three font files")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
