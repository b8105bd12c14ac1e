#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from psync.app import sync_okta_gitlab_groups
from psync.common.logging import configure_logging
from psync.config import ConfigurationError, get_sync_settings, parse_group_mapping

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from psync.config import SyncSettings

log = logging.getLogger(__name__)


def _add_common_options(
    parser: argparse.ArgumentParser,
    *,
    suppress_defaults: bool = False,
) -> None:
    # Suppressed defaults keep options given before a subcommand intact.
    default_env_file = argparse.SUPPRESS if suppress_defaults else None
    default_verbose = argparse.SUPPRESS if suppress_defaults else False
    parser.add_argument(
        "--env-file",
        type=str,
        default=default_env_file,
        help="Optional .env file to load before reading configuration",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=default_verbose,
        help="Enable debug logging",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="psync",
        description="Sync Okta group membership into GitLab group permissions",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Run one reconciliation pass")
    _add_common_options(sync, suppress_defaults=True)
    sync.add_argument(
        "--prefix",
        type=str,
        help="Okta group name prefix (defaults to PSYNC_GROUP_PREFIX or dev_)",
    )
    sync.add_argument(
        "--entitlement-group",
        type=str,
        help="GitLab group whose members may receive grants (defaults to PSYNC_ENTITLEMENT_GROUP)",
    )
    sync.add_argument(
        "--grant-level",
        type=str,
        help="Access level granted to new members (defaults to developer)",
    )
    sync.add_argument(
        "--max-privilege",
        type=str,
        help="Exclusive access level ceiling for managed members (defaults to owner)",
    )
    sync.add_argument(
        "--map",
        dest="mappings",
        action="append",
        default=[],
        metavar="OKTA=GITLAB",
        help="Explicit Okta group to GitLab group mapping; may be repeated",
    )
    sync.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Compute plans without changing GitLab memberships",
    )
    return parser.parse_args(list(argv))


def _build_settings(args: argparse.Namespace) -> SyncSettings:
    return get_sync_settings(
        entitlement_group=args.entitlement_group,
        group_prefix=args.prefix,
        grant_level=args.grant_level,
        max_privilege=args.max_privilege,
        group_mapping=parse_group_mapping(",".join(args.mappings)),
        dry_run=args.dry_run,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO, force=True)
    if parsed_args.env_file:
        load_dotenv(parsed_args.env_file, override=True)

    try:
        settings = _build_settings(parsed_args)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        if parsed_args.command == "sync":
            report = sync_okta_gitlab_groups(settings)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    if not report.ok:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
