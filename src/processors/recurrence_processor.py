# File: src/processors/recurrence_processor.py
"""
Recurring availability templates.
Expands a template plus a RecurrenceRule into concrete AvailabilityRecords
for the CRUD layer to persist.
"""

import calendar
import datetime
import json
from typing import List, Optional

from src.models import AvailabilityRecord, RecurrencePattern, RecurrenceRule
from src.models.common import js_day_of_week
from src.models.recurrence import AvailabilityTemplate
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

DAY_ABBREVIATIONS = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']
_ADVERBS = {
    RecurrencePattern.DAILY: ('daily', 'day'),
    RecurrencePattern.WEEKLY: ('weekly', 'week'),
    RecurrencePattern.MONTHLY: ('monthly', 'month'),
}


def add_months(day: datetime.date, months: int) -> datetime.date:
    """Same day-of-month `months` later, clamped to the month's last day."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return datetime.date(year, month, min(day.day, last_day))


def generate_recurring_dates(
    start: datetime.date,
    rule: RecurrenceRule,
    max_occurrences: int = 52
) -> List[datetime.date]:
    """
    Dates on which a template recurs.

    Args:
        start: Date of the first occurrence
        rule: Recurrence rule; end_date is exclusive and defaults to 12 months
        max_occurrences: Hard cap on the number of dates

    Returns:
        Chronological list of dates starting with `start` when it qualifies
    """
    if rule.pattern == RecurrencePattern.NONE:
        return [start]

    end = rule.end_date or add_months(start, 12)
    dates: List[datetime.date] = []

    if rule.pattern == RecurrencePattern.WEEKLY and rule.days_of_week:
        week_start = start - datetime.timedelta(days=js_day_of_week(start))
        while week_start < end and len(dates) < max_occurrences:
            for offset in rule.days_of_week:
                day = week_start + datetime.timedelta(days=offset)
                if start <= day < end and len(dates) < max_occurrences:
                    dates.append(day)
            week_start += datetime.timedelta(weeks=rule.interval)
        return dates

    occurrence = 0
    current = start
    while current < end and len(dates) < max_occurrences:
        dates.append(current)
        occurrence += 1
        if rule.pattern == RecurrencePattern.DAILY:
            current = start + datetime.timedelta(days=occurrence * rule.interval)
        elif rule.pattern == RecurrencePattern.WEEKLY:
            current = start + datetime.timedelta(weeks=occurrence * rule.interval)
        else:
            # Computed from `start` so short months do not drift the day
            current = add_months(start, occurrence * rule.interval)

    return dates


def expand_template(
    template: AvailabilityTemplate,
    rule: RecurrenceRule,
    max_occurrences: int = 52
) -> List[AvailabilityRecord]:
    """Materialize one AvailabilityRecord per recurrence date."""
    dates = generate_recurring_dates(template.date, rule, max_occurrences)
    records = [
        AvailabilityRecord(
            user_id=template.user_id,
            date=day,
            start_time=template.start_time,
            end_time=template.end_time,
            is_available=True,
            is_blocked=False,
            privacy_level=template.privacy_level,
        )
        for day in dates
    ]
    logger.info(f"Expanded template for {template.user_id} into {len(records)} records ({describe_rule(rule)})")
    return records


def encode_rule(rule: RecurrenceRule) -> str:
    return json.dumps(rule.to_dict())


def decode_rule(rule_string: str) -> Optional[RecurrenceRule]:
    """Parse a stored rule; None if it is not a valid rule."""
    try:
        return RecurrenceRule.from_dict(json.loads(rule_string))
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Could not decode recurrence rule {rule_string!r}: {e}")
        return None


def describe_rule(rule: RecurrenceRule) -> str:
    """Human-readable summary, e.g. 'Repeats every 2 weeks on Mon, Wed until 2024-12-31'."""
    if rule.pattern == RecurrencePattern.NONE:
        return "Does not repeat"

    adverb, unit = _ADVERBS[rule.pattern]
    text = adverb if rule.interval == 1 else f"every {rule.interval} {unit}s"

    if rule.pattern == RecurrencePattern.WEEKLY and rule.days_of_week:
        text += " on " + ", ".join(DAY_ABBREVIATIONS[d] for d in rule.days_of_week)

    if rule.end_date:
        text += f" until {rule.end_date.isoformat()}"

    return f"Repeats {text}"
