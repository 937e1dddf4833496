"""Spin an image (or the built-in whale) as ASCII art in the terminal."""

import argparse
import sys

from ascii_spin.app import Pipeline
from ascii_spin.config import DEFAULT_CONFIG
from ascii_spin.log import DEBUG_LOG_FILE, setup_logging
from ascii_spin.terminal import TerminalController, write_frame


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ascii-spin", description=__doc__)
    parser.add_argument("image", nargs="?", help="PNG/JPG to spin (default: built-in whale)")
    parser.add_argument("--frames", type=int, default=None, help="stop after N frames")
    parser.add_argument("--debug", action="store_true", help="log per-frame details (to --log-file)")
    parser.add_argument(
        "--log-file", default=None, help=f"write logs here instead of stderr (--debug default: {DEBUG_LOG_FILE})"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log_file = args.log_file
    if args.debug and log_file is None:
        log_file = DEBUG_LOG_FILE
    setup_logging(debug=args.debug, log_file=log_file)

    config = DEFAULT_CONFIG
    pipeline = Pipeline(config, on_frame=lambda frame: write_frame(frame, config))
    if args.image:
        loaded = pipeline.load_file(args.image)
    else:
        loaded = pipeline.load_default()
    if not loaded:
        print(f"ascii-spin: {pipeline.error}", file=sys.stderr)
        return 1
    if not pipeline.running:
        print(pipeline.display())
        return 0

    with TerminalController():
        try:
            pipeline.scheduler.run(max_frames=args.frames)
        except KeyboardInterrupt:
            pass
        finally:
            pipeline.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
