"""``gifhub`` console entry point.

Usage:
    gifhub octocat
    gifhub octocat -y 2016,2017,2018 -d 500 -s 0.5
    gifhub octocat -c scripts/user_config.py --backend subprocess
"""

import argparse
import sys
from typing import List, Optional

from gifhub import __version__
from gifhub.cli.run_gifhub import run_gifhub_pipeline
from gifhub.contracts.failure import GifhubError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gifhub",
        description="Generate an animated GIF of a GitHub user's yearly activity graph",
    )
    parser.add_argument("subject", nargs="?", help="GitHub user name")
    parser.add_argument("-y", "--years", default=None,
                        help='Years to graph: "all" or a comma separated list like "2016,2017"')
    parser.add_argument("-o", "--out-dir", help="Output directory")
    parser.add_argument("-d", "--delay", type=int, help="Display time of each frame in ms")
    parser.add_argument("-s", "--scale", type=float, help="Resize factor of the GIF")
    parser.add_argument("-c", "--config", help="Path to user config file (Python file with CONFIG dict)")
    parser.add_argument("--backend", choices=["pillow", "subprocess"], help="Rasterize/bundle backend")
    parser.add_argument("--keep-artifacts", action="store_true", default=None,
                        help="Keep intermediate frames of the subprocess backend")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def cli_args_from(args: argparse.Namespace) -> dict:
    """Map parsed arguments onto CLIConfig field names."""
    return {
        "subject": args.subject,
        "periods": args.years,
        "out_dir": args.out_dir,
        "duration_ms": args.delay,
        "scale": args.scale,
        "backend": args.backend,
        "keep_artifacts": args.keep_artifacts,
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.subject is None and args.config is None:
        parser.print_help()
        return 0

    try:
        run_gifhub_pipeline(args.config, cli_args_from(args), verbose=args.verbose)
    except (GifhubError, ValueError, FileNotFoundError) as e:
        print(f"gifhub: error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
