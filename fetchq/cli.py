"""CLI: list sites, select directories and queue them in lftp."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from .config import DEFAULT_CONFIG_PATH, load_config
from .core.config import MatchRuleSet
from .core.errors import ConfigError, FetchqError
from .core.protocols import ProgressReporter, TransferClient
from .date_utils import format_duration
from .logging.rich_logger import QuietProgressReporter, RichProgressReporter, configure_logging
from .services.queue import Queue
from .services.transfer import LftpClient


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fetchq",
        description="Select new directories on remote sites and queue them in lftp.",
    )
    parser.add_argument(
        "-f", "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        metavar="FILE",
        help=f"Path to config (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="Print generated scripts instead of running them",
    )
    parser.add_argument(
        "-t", "--test",
        action="store_true",
        help="Test config and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )
    return parser


def describe_site(rules: MatchRuleSet) -> dict:
    """Settings of one site for display."""
    return {
        "Remote Dir": rules.remote_dir,
        "Max Age": format_duration(rules.max_age) or "-",
        "Patterns": ", ".join(p.pattern for p in rules.include_patterns) or "-",
        "Filters": ", ".join(p.pattern for p in rules.exclude_patterns) or "-",
        "Parser": rules.media_parser.name,
        "Local Dir": rules.local_path_template.text,
        "Priorities": ", ".join(p.pattern for p in rules.priority_patterns) or "-",
        "Deduplicate": rules.deduplicate,
        "Skip Symlinks": rules.skip_symlinks,
        "Post Command": rules.post_command or "-",
        "Client": f"{rules.client.tool_path} ({rules.client.get_command})",
    }


def run_site(
    rules: MatchRuleSet,
    client: TransferClient,
    reporter: ProgressReporter,
    *,
    dry_run: bool = False,
    out: Optional[TextIO] = None,
) -> Queue:
    """Build and process the queue of one site.

    Raises:
        ListingParseError: the listing could not be parsed.
        ProcessError: lftp or the post command failed.
    """
    entries = client.list_dirs(rules.name, rules.remote_dir)
    queue = Queue.build(rules, entries)
    transferable = queue.transferable()

    reporter.print_queue(rules.name, queue.items + queue.local)
    for group in queue.duplicates:
        reporter.debug(f"Kept {group.kept.path} over {group.count - 1} duplicate(s)")

    if dry_run:
        (out or sys.stdout).write(queue.script())
        return queue

    if not transferable:
        reporter.info(f"{rules.name}: nothing to transfer ({len(queue.items)} listed)")
        return queue

    reporter.info(f"{rules.name}: queueing {len(transferable)} of {len(queue.items)} directories")
    client.run_script(queue.script())
    queue.run_post_command()
    reporter.success(f"{rules.name}: done")
    return queue


def main(
    argv: Optional[list[str]] = None,
    client_factory: Callable[[MatchRuleSet], TransferClient] = lambda rules: LftpClient(rules.client),
) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)
    if args.quiet:
        reporter = QuietProgressReporter()
    else:
        reporter = RichProgressReporter(verbose=args.verbose)

    try:
        config = load_config(args.config)
        sites = config.site_rules()
    except ConfigError as e:
        reporter.error(str(e))
        return 2

    if args.test:
        for rules in sites:
            reporter.print_header(f"Site: {rules.name}")
            reporter.print_config(describe_site(rules))
        reporter.success(f"Read config successfully ({len(sites)} sites)")
        return 0

    try:
        for rules in sites:
            run_site(rules, client_factory(rules), reporter, dry_run=args.dry_run)
    except KeyboardInterrupt:
        return 130
    except FetchqError as e:
        # First failing site aborts the run
        reporter.error(f"{rules.name}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
