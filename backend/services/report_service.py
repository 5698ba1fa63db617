"""Period summaries derived from snapshot groups."""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Optional, Sequence

from services.metrics_service import percent_of
from services.snapshot_pivot_service import category_label, sort_groups

ZERO = Decimal("0")


@dataclass
class DateRange:
    """Inclusive calendar-day range; either bound may be open."""

    from_date: Optional[date] = None
    to_date: Optional[date] = None

    def lower_bound(self) -> Optional[datetime]:
        if self.from_date is None:
            return None
        return datetime.combine(self.from_date, time.min)

    def upper_bound(self) -> Optional[datetime]:
        """End of day (23:59:59.999999) of ``to_date``."""
        if self.to_date is None:
            return None
        return datetime.combine(self.to_date, time.max)


@dataclass
class CategoryAllocation:
    """One category's value in the latest snapshot of a period."""

    category: str
    value: Decimal
    percentage: Decimal


@dataclass
class ReportSummary:
    """Initial vs final net worth over a period, plus the latest allocation."""

    initial: Decimal
    final: Decimal
    pnl: Decimal
    pnl_percent: Decimal
    snapshot_count: int
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    latest_total: Decimal = ZERO
    allocation: list[CategoryAllocation] = field(default_factory=list)


def _naive_utc(value: datetime) -> datetime:
    """Normalise to a naive UTC datetime (the form SQLite hands back)."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def filter_groups(groups: Sequence[Any], date_range: Optional[DateRange]) -> list[Any]:
    """Keep the groups whose ``created_at`` falls inside ``date_range``.

    ``None`` keeps everything. Input order is preserved.
    """
    if date_range is None:
        return list(groups)

    lower = date_range.lower_bound()
    upper = date_range.upper_bound()
    result = []
    for group in groups:
        created = _naive_utc(group.created_at)
        if lower is not None and created < lower:
            continue
        if upper is not None and created > upper:
            continue
        result.append(group)
    return result


def category_allocation(group: Any) -> list[CategoryAllocation]:
    """Sum one group's items per category, dropping non-positive totals.

    Percentages use the group's own total as denominator.
    """
    totals: dict[str, Decimal] = {}
    for item in group.items:
        key = category_label(item)
        totals[key] = totals.get(key, ZERO) + (item.total_value_brl or ZERO)

    group_total = group.total
    return [
        CategoryAllocation(category=name, value=value, percentage=percent_of(value, group_total))
        for name, value in totals.items()
        if value > 0
    ]


def derive_summary(groups: Sequence[Any], date_range: Optional[DateRange] = None) -> ReportSummary:
    """Compute P&L between the first and last snapshot in range.

    Args:
        groups: Snapshot groups with ``created_at``, ``items`` and ``total``.
        date_range: Optional inclusive range; see ``filter_groups``.

    Returns:
        ReportSummary. With no group in range every figure is 0; with a
        single group initial equals final and the P&L is 0.
    """
    in_range = sort_groups(filter_groups(groups, date_range))
    if not in_range:
        return ReportSummary(
            initial=ZERO,
            final=ZERO,
            pnl=ZERO,
            pnl_percent=ZERO,
            snapshot_count=0,
        )

    first, latest = in_range[0], in_range[-1]
    initial = first.total
    final = latest.total
    pnl = final - initial

    return ReportSummary(
        initial=initial,
        final=final,
        pnl=pnl,
        pnl_percent=percent_of(pnl, initial),
        snapshot_count=len(in_range),
        start=first.created_at,
        end=latest.created_at,
        latest_total=final,
        allocation=category_allocation(latest),
    )
