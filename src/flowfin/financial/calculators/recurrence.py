"""Recurring cash-flow expansion.

A user enters one cash flow plus a recurrence policy; the ledger stores one
dated entry per occurrence. Projection covers roughly one year ahead:

- NONE: the entry itself
- MONTHLY: 12 entries, one month apart
- QUARTERLY: 4 entries, three months apart
- SEMIANNUAL: 2 entries, six months apart
- ANNUAL: ``annual_occurrences`` entries (2 by default: this year and next,
  so an entry created late in the year still shows up in the following one)

Day-of-month overflow clamps to the last day of the target month.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from loguru import logger

from ..dates import add_months
from ..models import CashFlowEntry, RecurrencePolicy, new_id

ANNUAL_OCCURRENCES = 2


@dataclass(frozen=True)
class RecurrenceSchedule:
    """How many occurrences a policy produces and how far apart they are."""

    occurrences: int
    month_step: int


_SCHEDULES: dict[RecurrencePolicy, RecurrenceSchedule] = {
    RecurrencePolicy.NONE: RecurrenceSchedule(occurrences=1, month_step=0),
    RecurrencePolicy.MONTHLY: RecurrenceSchedule(occurrences=12, month_step=1),
    RecurrencePolicy.QUARTERLY: RecurrenceSchedule(occurrences=4, month_step=3),
    RecurrencePolicy.SEMIANNUAL: RecurrenceSchedule(occurrences=2, month_step=6),
}


def schedule_for(policy: RecurrencePolicy | str, annual_occurrences: int = ANNUAL_OCCURRENCES) -> RecurrenceSchedule:
    """Return the occurrence count and month step for a policy.

    Args:
        policy: Recurrence policy (enum or its string value).
        annual_occurrences: Number of yearly occurrences for ANNUAL.
    """
    policy = RecurrencePolicy(policy)
    if policy == RecurrencePolicy.ANNUAL:
        if annual_occurrences < 1:
            raise ValueError(f"annual_occurrences must be >= 1, got {annual_occurrences}")
        return RecurrenceSchedule(occurrences=annual_occurrences, month_step=12)
    return _SCHEDULES[policy]


def expand_recurrence(
    template: CashFlowEntry,
    policy: RecurrencePolicy | str = RecurrencePolicy.NONE,
    annual_occurrences: int = ANNUAL_OCCURRENCES,
) -> list[CashFlowEntry]:
    """Project a template entry into its dated occurrences.

    The first occurrence is the template itself (same date, same id). Later
    occurrences copy every field except the date and get a fresh id, since
    each one is stored and deleted independently.

    Args:
        template: The entry as the user typed it; its date is the start date.
        policy: Recurrence policy.
        annual_occurrences: Yearly occurrences generated for ANNUAL.

    Returns:
        Entries ordered by date.
    """
    schedule = schedule_for(policy, annual_occurrences)

    entries = [template]
    for i in range(1, schedule.occurrences):
        entries.append(
            dataclasses.replace(
                template,
                date=add_months(template.date, i * schedule.month_step),
                entry_id=new_id(),
            )
        )

    logger.debug(
        f"Expanded '{template.name}' ({RecurrencePolicy(policy).value}) into {len(entries)} entries "
        f"from {entries[0].date} to {entries[-1].date}"
    )
    return entries
