from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from bumpkit.adapters.branch_config import dump_outcome, load_branch_config
from bumpkit.app import build_content_source, reconcile_branch, write_changes
from bumpkit.config import ConfigurationError, configure_logging
from bumpkit.domain.reconciliation import InvalidUpgradeError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _worktree(value: str) -> tuple[str, Path]:
    branch, sep, directory = value.partition("=")
    if not sep or not branch or not directory:
        raise argparse.ArgumentTypeError(f"expected BRANCH=DIR, got {value!r}")
    return branch, Path(directory)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile dependency upgrades into branch changes"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile", help="Compute the file changes for one update branch"
    )
    reconcile.add_argument("config", type=Path, help="Branch config JSON file")
    source = reconcile.add_mutually_exclusive_group()
    source.add_argument(
        "--repo-dir",
        type=Path,
        help="Checkout to read files from (defaults to the current directory)",
    )
    source.add_argument(
        "--remote",
        action="store_true",
        help="Read files over HTTP using BUMPKIT_RAW_URL_TEMPLATE",
    )
    reconcile.add_argument(
        "--worktree",
        action="append",
        type=_worktree,
        default=[],
        metavar="BRANCH=DIR",
        help="Read BRANCH from its own checkout DIR (repeatable)",
    )
    reconcile.add_argument(
        "--output",
        type=Path,
        help="Write the outcome JSON to this file instead of stdout",
    )
    reconcile.add_argument(
        "--write",
        action="store_true",
        help="Write changed files and artifacts into the checkout",
    )

    args = parser.parse_args(list(argv))
    if args.write and args.remote:
        raise ValueError("--write needs a local checkout, not --remote")
    if args.worktree and args.remote:
        raise ValueError("--worktree needs a local checkout, not --remote")
    return args


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        config = load_branch_config(parsed_args.config)
        source = build_content_source(
            repo_dir=parsed_args.repo_dir,
            remote=parsed_args.remote,
            worktrees=dict(parsed_args.worktree),
        )
    except (ValueError, OSError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        outcome = reconcile_branch(config, source=source)
    except InvalidUpgradeError:
        log.exception("Invalid upgrade in branch config")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)

    payload = dump_outcome(outcome)
    if parsed_args.output is not None:
        parsed_args.output.write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)  # noqa: T201

    if parsed_args.write:
        root = parsed_args.repo_dir or Path.cwd()
        written = write_changes(root, [*outcome.updated_package_files, *outcome.updated_artifacts])
        log.info("Wrote %d file(s) into %s", len(written), root)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
