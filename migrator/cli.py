"""Command line entry point for the migration job."""

import argparse
import logging
import sys
from typing import List, Optional

from .errors import ConfigurationError, JobAbortedError
from .job import MigrationJob
from .models.config import JobConfig
from .stores.api_store import APIRecordStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ABORTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Record Migrator - Migrate records between record stores through CSV files"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    for name, help_text in (
        ("run", "Run a migration job"),
        ("validate", "Validate and repair the CSV files only"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--config", required=True, help="Path to job config file")
        sub.add_argument("--no-prompt", action="store_true", help="Continue without asking when issues are found")
        sub.add_argument("--dry-run", action="store_true", help="Simulate without deleting target records")
        sub.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
        sub.add_argument("--log-file", help="Also write the log to this file")

    return parser


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in ("run", "validate"):
        parser.print_help()
        return EXIT_OK

    setup_logging(args.verbose, args.log_file)
    return run_job(args)


def run_job(args) -> int:
    """Run a job from config file."""
    try:
        config = JobConfig.from_json_file(args.config)
    except (OSError, ConfigurationError) as e:
        logger.error(f"Cannot load job config: {e}")
        return EXIT_FAILED

    if args.no_prompt:
        config.prompt_on_issues_in_csv_files = False
    if args.dry_run:
        config.dry_run = True

    store = None
    if config.target_url:
        store = APIRecordStore(config.target_url, config.target_api_key, dry_run=config.dry_run)

    job = MigrationJob.from_config(config, store)

    try:
        status = job.run(validate_only=args.command == "validate")
    except JobAbortedError:
        return EXIT_ABORTED
    except Exception:
        return EXIT_FAILED

    print("\n" + "=" * 60)
    print("JOB COMPLETE")
    print("=" * 60)
    print(f"Status: {status.value}")
    print(f"CSV issues: {len(job.issues)}")
    if job.validation_outcome:
        print(f"Validation: {job.validation_outcome.value}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
