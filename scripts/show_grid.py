"""
Print a player's occupancy grid for a date range.

Usage:
    python scripts/show_grid.py --user alice --start 2024-06-10 --end 2024-06-16
    python scripts/show_grid.py --user alice --start 2024-06-10 --end 2024-06-10 --json
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.core.orchestrator import OrchestratorFactory
from src.models import OccupancyGrid, SlotState, StoreError, parse_date
from src.models.common import minutes_to_time_str
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

STATE_CHARS = {
    SlotState.UNAVAILABLE: '.',
    SlotState.AVAILABLE: 'A',
    SlotState.BOOKED: 'B',
}


def render(grid: OccupancyGrid) -> str:
    """One line per hour, one character per slot."""
    lines = []
    for day in sorted(grid.days):
        lines.append(day.strftime('%a %Y-%m-%d'))
        for hour in range(grid.start_hour, grid.end_hour):
            cells = ''.join(STATE_CHARS[c.state] for c in grid.cells_for(day, hour))
            lines.append(f"  {minutes_to_time_str(hour * 60)} {cells}")
    return '\n'.join(lines)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show a player's availability grid")
    parser.add_argument('--user', required=True, help="User id")
    parser.add_argument('--start', required=True, help="First date, YYYY-MM-DD")
    parser.add_argument('--end', required=True, help="Last date, YYYY-MM-DD")
    parser.add_argument('--json', action='store_true', help="Print the grid as JSON")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        orchestrator = OrchestratorFactory.create()
        grid = orchestrator.build_grid(args.user, parse_date(args.start), parse_date(args.end))
    except StoreError as e:
        logger.error(f"Could not load records for {args.user}: {e}")
        return 3
    except ValueError as e:
        logger.error(f"Invalid arguments: {e}")
        return 2

    if args.json:
        print(json.dumps(grid.to_dict(), indent=2))
    else:
        print(render(grid))

    logger.info(
        f"{grid.count(SlotState.AVAILABLE)} available, "
        f"{grid.count(SlotState.BOOKED)} booked slots"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
