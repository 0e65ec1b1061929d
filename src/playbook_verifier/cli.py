"""
Playbook verifier command-line interface.

Reads a playbook from ``PLAYBOOK_SOURCE`` (or stdin), strips the fields it
declares as excluded and writes the canonical bytes to stdout.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import BinaryIO

from playbook_verifier.errors import ConfigError, PlaybookVerifierError
from playbook_verifier.logging import configure_logging, get_logger, new_correlation_id
from playbook_verifier.pipeline import run_pipeline
from playbook_verifier.settings import Settings, load_settings
from playbook_verifier.source import PlaybookSource, read_playbook

__all__ = ["build_parser", "main"]

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playbook-verifier",
        description="Emit the canonical, signable form of a playbook.",
    )
    parser.add_argument(
        "--source",
        default=None,
        help="Path to the playbook (default: $PLAYBOOK_SOURCE, else stdin)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: WARNING)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    parser.add_argument(
        "--show-exclusions",
        action="store_true",
        help="Print the exclusion paths that were applied to stderr",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
    settings: Settings | None = None,
) -> int:
    """Run the verifier; returns the process exit code."""
    args = build_parser().parse_args(argv)

    if settings is None:
        try:
            settings = load_settings()
        except ConfigError as exc:
            configure_logging(json_output=args.json_logs, level=args.log_level or "WARNING")
            logger.error(exc.message, **exc.to_dict())
            return exc.exit_code

    configure_logging(
        json_output=args.json_logs or settings.log_json,
        level=args.log_level or settings.log_level,
    )
    new_correlation_id()

    if args.source is not None:
        source = PlaybookSource(path=args.source)
    else:
        source = PlaybookSource.from_settings(settings)

    try:
        raw = read_playbook(source, stdin=stdin)
        result = run_pipeline(raw, settings.excludable_keys)
    except PlaybookVerifierError as exc:
        logger.bind(source=str(source)).error(exc.message, **exc.to_dict())
        return exc.exit_code

    if args.show_exclusions:
        for path in result.exclusions:
            print("/" + "/".join(path), file=sys.stderr)

    out = stdout if stdout is not None else sys.stdout.buffer
    out.write(result.canonical)
    out.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
