"""
Books expenses for recurring templates that are due in a month.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from finsight.models.model import Expense
from finsight.repositories import recurring_crud
from finsight.utils.months import month_range
from finsight.utils.recurring_schedule import expense_date_for, is_due

logger = logging.getLogger(__name__)


class RecurringService:
    """Turns due recurring templates into expenses, once per period."""

    @staticmethod
    def process_month(db: Session, month: str) -> dict:
        """
        Create this month's expense for every active auto-add template that is due.

        All expenses of a run are committed together; a failure leaves no
        template half processed.
        """
        _, last_day = month_range(month)
        expense_date = expense_date_for(month)
        templates = recurring_crud.get_active_auto_add(db, on_date=last_day.date())
        logger.info(f"Processing {len(templates)} recurring expenses for {month}")

        processed = skipped = 0
        for recurring in templates:
            if recurring.last_processed_month == month:
                logger.debug(f"Skipping {recurring.name}: already processed for {month}")
                skipped += 1
                continue
            if not is_due(recurring.frequency, recurring.last_processed_month, month):
                logger.debug(f"Skipping {recurring.name}: not due for {month}")
                skipped += 1
                continue

            db.add(
                Expense(
                    user_id=recurring.user_id,
                    category_id=recurring.category_id,
                    recurring_expense_id=recurring.recurring_expense_id,
                    date=datetime.combine(expense_date, datetime.min.time()),
                    merchant=recurring.name,
                    amount=recurring.amount,
                    note=f"Auto-added {recurring.frequency.lower()} expense",
                    is_recurring=True,
                    frequency=recurring.frequency,
                )
            )
            recurring.last_processed_month = month
            processed += 1

        db.commit()
        logger.info(f"Recurring run for {month}: {processed} processed, {skipped} skipped")
        return {"month": month, "processed": processed, "skipped": skipped}
