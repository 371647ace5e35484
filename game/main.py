"""Entry point for running La Cosa."""

import argparse
import sys

from lacosa.game import run
from lacosa.i18n import world_path


class _Tee:
    """Write to the console and the debug log at once."""

    def __init__(self, console, log):
        self._streams = (console, log)

    def write(self, s: str) -> int:
        for stream in self._streams:
            stream.write(s)
        return len(s)

    def flush(self) -> None:
        for stream in self._streams:
            stream.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lacosa", description="La Cosa, avventura testuale")
    parser.add_argument("--language", default="it")
    parser.add_argument("--slot", type=int, default=1, help="Save slot used by this session (default 1)")
    parser.add_argument(
        "--debug",
        nargs="?",
        const=True,
        metavar="FILE",
        help="Enable debug mode; optionally provide FILE to tee STDOUT to it and redirect STDERR only to it",
    )
    return parser


def run_cli(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    data_path = str(world_path(args.language))
    debug_opt = args.debug

    if isinstance(debug_opt, str):  # --debug FILE provided
        orig_stdout = sys.stdout
        orig_stderr = sys.stderr
        with open(debug_opt, "w", encoding="utf-8") as fh:
            try:
                sys.stdout = _Tee(orig_stdout, fh)
                sys.stderr = fh
                run(data_path, language=args.language, debug=True, slot=args.slot)
            finally:
                sys.stdout = orig_stdout
                sys.stderr = orig_stderr
    else:
        run(data_path, language=args.language, debug=debug_opt is True, slot=args.slot)


if __name__ == "__main__":
    run_cli()
