"""
Check whether a proposed booking collides with a player's commitments.

Usage:
    python scripts/check_conflict.py --user alice --date 2024-06-10 --start 10:00 --end 11:00
    python scripts/check_conflict.py --user alice --date 2024-06-10 --start 10:00 --end 11:00 --exclude 42

Exit codes:
    0: No conflict
    1: Configuration or unexpected error
    2: Invalid request
    4: Conflict (or the check could not be completed)
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.core.orchestrator import OrchestratorFactory
from src.models import RequestValidationError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a proposed booking for conflicts")
    parser.add_argument('--user', required=True, help="User id")
    parser.add_argument('--date', required=True, help="Date, YYYY-MM-DD")
    parser.add_argument('--start', required=True, help="Start time, HH:MM")
    parser.add_argument('--end', required=True, help="End time, HH:MM")
    parser.add_argument('--exclude', help="Booking or availability id to ignore (when editing)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        orchestrator = OrchestratorFactory.create()
        result = orchestrator.check_conflict({
            'user_id': args.user,
            'date': args.date,
            'start_time': args.start,
            'end_time': args.end,
            'exclude_id': args.exclude,
        })
    except RequestValidationError as e:
        logger.error(f"Invalid request: {e}")
        return 2
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    print(json.dumps(result.to_dict(), indent=2))

    if result.failed_closed:
        logger.warning("Commitments could not be loaded; treating the slot as conflicting")
    return 4 if result.has_conflict else 0


if __name__ == "__main__":
    sys.exit(main())
