#!/usr/bin/env python3
"""
CLI entry point for the Clone Agent.

Usage:
    # Export a Terraform config that clones the origin project into my-clone:
    python -m clone_agent projects:clone my-clone --project my-origin --token "$(gcloud auth print-access-token)"

Or with environment variables in .env file:
    python -m clone_agent projects:clone my-clone
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .commands import run_projects_clone
from .config import CloneConfig
from .errors import create_google_api_error
from .logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="clone_agent",
        description="Clone Agent - Export a Firebase project as a Terraform config",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (can be set in .env):
  GOOGLE_OAUTH_ACCESS_TOKEN       Access token (e.g. from gcloud auth print-access-token)
  FIREBASE_PROJECT                Origin project to clone (or GOOGLE_CLOUD_PROJECT)
  OUTPUT_DIR                      Output directory (default: ./terraform)
  TIMEOUT                         Request timeout in seconds (default: 30)
  MAX_RETRIES                     Retries on 429/5xx/transport errors (default: 0)
  MAX_LIST_PAGES                  Firestore pages per listing, 0 = all (default: 1)
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    clone = subparsers.add_parser(
        "projects:clone",
        help="export a terraform config file which can be used to clone the current firebase project",
    )
    clone.add_argument(
        "project_id",
        nargs="?",
        metavar="PROJECT_ID",
        help="ID of the project the generated config will create",
    )
    clone.add_argument(
        "-n", "--display-name",
        metavar="NAME",
        help="(optional) display name for the project",
    )
    parent = clone.add_mutually_exclusive_group()
    parent.add_argument(
        "-o", "--organization",
        metavar="ORGANIZATION_ID",
        help="(optional) ID of the parent Google Cloud Platform organization under which to create this project",
    )
    parent.add_argument(
        "-f", "--folder",
        metavar="FOLDER_ID",
        help="(optional) ID of the parent Google Cloud Platform folder in which to create this project",
    )
    clone.add_argument(
        "-P", "--project",
        metavar="ORIGIN_PROJECT_ID",
        help="Project to clone (default: FIREBASE_PROJECT / GOOGLE_CLOUD_PROJECT)",
    )
    clone.add_argument(
        "--token",
        metavar="TOKEN",
        help="OAuth2 access token (default: GOOGLE_OAUTH_ACCESS_TOKEN)",
    )
    clone.add_argument(
        "--out",
        metavar="DIR",
        type=Path,
        help="Output directory (default: ./terraform)",
    )
    clone.add_argument(
        "--timeout",
        metavar="SECONDS",
        type=int,
        help="Per-request timeout in seconds (default: 30)",
    )
    clone.add_argument(
        "--max-retries",
        metavar="N",
        type=int,
        help="Retries on rate limiting and server errors (default: 0)",
    )
    clone.add_argument(
        "--max-list-pages",
        metavar="N",
        type=int,
        help="Pages read per Firestore listing, 0 for all (default: 1)",
    )

    # Logging
    clone.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    clone.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )
    clone.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.quiet:
        log_level = logging.ERROR
    elif args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = None

    logger = setup_logging(level=log_level or logging.INFO, json_format=args.json_logs)

    try:
        config = CloneConfig.from_env(
            access_token=args.token,
            origin_project_id=args.project,
            output_dir=str(args.out) if args.out else None,
            timeout=args.timeout,
            max_retries=args.max_retries,
            max_list_pages=args.max_list_pages,
            json_logs=True if args.json_logs else None,
        )
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    # .env may ask for a different level or JSON output
    if log_level is None or config.json_logs != args.json_logs:
        logger = setup_logging(
            level=log_level or logging.getLevelName(config.log_level),
            json_format=config.json_logs,
        )

    try:
        result = asyncio.run(
            run_projects_clone(
                config,
                args.project_id,
                display_name=args.display_name,
                organization=args.organization,
                folder=args.folder,
            )
        )
        logger.info(
            f"Clone export complete: {result.output_path} "
            f"({result.document_count} Firestore documents)"
        )
        return 0

    except KeyboardInterrupt:
        logger.warning("Clone export interrupted by user")
        return 130

    except Exception as e:
        report = create_google_api_error(e, resource=config.origin_project_id)
        logger.error(f"Clone export failed: {report.message}")
        logger.error(f"Suggestion: {report.suggestion}")
        logger.debug(report.technical, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
