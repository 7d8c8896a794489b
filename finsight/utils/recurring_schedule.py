from datetime import date
from typing import Optional

from finsight.utils.constants import RecurringFrequency
from finsight.utils.months import months_between, parse_month
from finsight.utils.summary_calculator import to_frequency


def is_due(frequency, last_processed_month: Optional[str], current_month: str) -> bool:
    """
    Whether a recurring template should produce an expense in current_month.

    Weekly templates are booked once a month like monthly ones; the monthly
    equivalent in the summary accounts for their real weight.
    """
    frequency = to_frequency(frequency)
    if not last_processed_month:
        return True

    if frequency in (RecurringFrequency.MONTHLY, RecurringFrequency.WEEKLY):
        return current_month != last_processed_month

    return months_between(last_processed_month, current_month) >= 12


def expense_date_for(current_month: str) -> date:
    year, month_num = parse_month(current_month)
    return date(year, month_num, 1)
