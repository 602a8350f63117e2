"""
Suggest meeting times where every participant is free.

Usage:
    python scripts/suggest.py --participants alice bob --start 2024-06-10 --end 2024-06-12 --duration 90
    python scripts/suggest.py --request request.json

Exit codes:
    0: Search ran (an empty suggestion list is still a success)
    1: Configuration or unexpected error
    2: Invalid request
    3: Participant data could not be fetched
"""

import argparse
import json
import sys
import time
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.core.orchestrator import OrchestratorFactory
from src.models import RequestValidationError, UpstreamFetchError
from src.utils.logger import log_banner, setup_logger

logger = setup_logger(__name__)


def build_request(args: argparse.Namespace) -> dict:
    """Request dict from a JSON file or from the command-line flags."""
    if args.request:
        with open(args.request, 'r', encoding='utf-8') as f:
            return json.load(f)

    return {
        'participant_ids': args.participants or [],
        'requester_id': args.requester,
        'start_date': args.start,
        'end_date': args.end,
        'duration_minutes': args.duration,
    }


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find common free time for a group of players")
    parser.add_argument('--request', help="Path to a JSON search request")
    parser.add_argument('--participants', nargs='+', help="Participant user ids")
    parser.add_argument('--requester', help="Requesting user id (always included)")
    parser.add_argument('--start', help="First date, YYYY-MM-DD")
    parser.add_argument('--end', help="Last date, YYYY-MM-DD")
    parser.add_argument('--duration', type=int, help="Meeting length in minutes")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Main execution function.

    Returns:
        Exit code (see module docstring)
    """
    args = parse_args(argv)
    start_time = time.time()

    log_banner(logger, "Starting Courtside time suggestion")

    try:
        request = build_request(args)
        orchestrator = OrchestratorFactory.create()
        response = orchestrator.suggest_times(request)

        print(json.dumps(response.to_dict(), indent=2))
        logger.info(response.message)
        return 0

    except RequestValidationError as e:
        logger.error(f"Invalid request: {e}")
        return 2

    except UpstreamFetchError as e:
        logger.error(str(e))
        return 3

    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 1

    except KeyboardInterrupt:
        logger.warning("Search interrupted by user")
        return 1

    finally:
        elapsed = time.time() - start_time
        logger.info(f"Total execution time: {elapsed:.2f} seconds")


if __name__ == "__main__":
    sys.exit(main())
