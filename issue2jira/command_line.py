import sys
from argparse import ArgumentParser
import traceback
import logging

from .config import load_config
from .issue2jira import IssueToJira


logger = logging.getLogger(__name__)


def _parse_args():
    parser = ArgumentParser(description="Create a JIRA issue from a GitHub issue form submission")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug log messages")
    parser.add_argument("--dry-run", action="store_true", help="build the JIRA issue but do not call JIRA or GitHub")

    return parser.parse_args()


def main():
    args = _parse_args()

    _configure_logging(args)

    try:
        config = load_config()
    except Exception:
        _print_error("Failed reading configuration from environment:")
        traceback.print_exc(file=sys.stderr)
        return 1

    try:
        IssueToJira.from_config(config, dry_run=args.dry_run).run()
    except Exception:
        logger.exception("Fatal error")
        return 1

    return 0


def _configure_logging(args):
    handler = logging.StreamHandler(sys.stdout)

    if args.verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler.setLevel(level)
    logging.getLogger("issue2jira").setLevel(level)

    formatter = logging.Formatter("%(asctime)s - %(levelname)-7s - %(name)s - %(message)s")
    handler.setFormatter(formatter)

    logging.getLogger().addHandler(handler)


def _print_error(*args, **kwargs):
    print(*args, **kwargs, file=sys.stderr)
