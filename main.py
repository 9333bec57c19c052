#!/usr/bin/env python3
"""
Main entry point for the multi-version tool installer.

    install-tool /tools/*
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from install_tool.core.driver import InstallationDriver
from install_tool.utils.logging import setup_root_logger
from config.settings import Settings


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="install-tool",
        description="Install every version listed in each tool directory's manifest and link version aliases"
    )

    parser.add_argument(
        "tool_directories",
        nargs="*",
        type=Path,
        metavar="TOOL_DIR",
        help="Tool directories to process, in order"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging, including hook output"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve manifests and log the plan without running hooks or linking"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any tool failed or was skipped"
    )

    parser.add_argument(
        "--hook-timeout",
        type=float,
        help="Seconds before an installer hook is considered failed"
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write logs to this file"
    )

    parser.add_argument(
        "--report",
        type=Path,
        help="Write a JSON run summary to this path"
    )

    return parser.parse_args(argv)


def load_config(args) -> Settings:
    """Build settings from the environment, overridden by command line args."""
    overrides = {}
    if args.tool_directories:
        overrides["tool_directories"] = tuple(args.tool_directories)
    if args.debug:
        overrides["debug"] = True
    if args.dry_run:
        overrides["dry_run"] = True
    if args.strict:
        overrides["strict"] = True
    if args.hook_timeout is not None:
        overrides["hook_timeout"] = args.hook_timeout
    if args.report:
        overrides["report_path"] = args.report

    settings = Settings(**overrides)
    if args.log_file:
        settings = settings.model_copy(update={
            "logging": settings.logging.model_copy(update={"file_path": args.log_file})
        })
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    # Load environment variables from .env file
    load_dotenv()

    args = parse_arguments(argv)

    try:
        settings = load_config(args)
    except ValidationError as e:
        setup_root_logger(level="INFO")
        logging.getLogger(__name__).error(f"Invalid configuration: {e}")
        return 1

    setup_root_logger(
        settings.logging.file_path,
        settings.log_level,
        settings.logging.format,
        settings.logging.max_file_size_mb,
        settings.logging.backup_count
    )
    logger = logging.getLogger(__name__)

    if not settings.tool_directories:
        logger.error("No tool directories given")
        return 1

    logger.info("Starting multi-version tool installation")
    logger.debug(f"Settings: {settings.model_dump()}")

    driver = InstallationDriver(settings)
    batch = driver.run()

    # Print summary
    logger.info("=" * 60)
    logger.info("SUMMARY")
    logger.info("=" * 60)
    for result in batch.results:
        line = f"{result.tool_name}: {result.status.value}"
        if result.installed_versions:
            line += f" ({', '.join(result.installed_versions)})"
        if result.error:
            line += f" - {result.error}"
        logger.info(line)
    logger.info(f"Completed: {batch.completed}  Failed: {batch.failed}  Skipped: {batch.skipped}")
    logger.info(f"Duration: {batch.duration_seconds or 0:.2f} seconds")
    logger.info("=" * 60)

    if settings.strict and not batch.all_succeeded:
        return 1
    return 0


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
