"""Pivot snapshot groups into chart- and table-ready structures.

Two conventions coexist on purpose:

- ``pivot_by_asset`` is sparse: an asset absent from a snapshot has a
  ``None`` cell (shown as "—").
- ``pivot_by_date`` is dense: every key has a numeric value at every date,
  0 when absent, which is what a stacked chart needs.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Sequence

from utils.labels import UNCATEGORIZED_LABEL, label_or

ZERO = Decimal("0")

TOTAL_ROW_KEY = "TOTAL"
MISSING_CELL = "—"


class PivotGrouping(str, Enum):
    """Key used to stack values in ``pivot_by_date``."""

    asset = "asset"
    category = "category"


@dataclass
class PivotRow:
    """One asset across every snapshot date."""

    key: str
    asset_name: str
    category_name: str
    values: list[Optional[Decimal]]
    is_total: bool = False


@dataclass
class AssetPivotTable:
    """Asset-by-date matrix; ``rows[-1]`` is always the TOTAL row."""

    dates: list[datetime]
    group_ids: list[str]
    rows: list[PivotRow]


@dataclass
class StackedPoint:
    """Values for every key at one snapshot date."""

    date: datetime
    group_id: str
    values: dict[str, Decimal]


@dataclass
class StackedSeries:
    """Dense key-by-date series for stacked charts."""

    grouping: PivotGrouping
    keys: list[str]
    labels: dict[str, str] = field(default_factory=dict)
    points: list[StackedPoint] = field(default_factory=list)


@dataclass
class ValuePoint:
    """A single date/value data point."""

    date: datetime
    group_id: str
    value: Decimal


def sort_groups(groups: Sequence[Any]) -> list[Any]:
    """Return groups ordered by ``created_at`` ascending (stable)."""
    return sorted(groups, key=lambda g: g.created_at)


def asset_identity(item: Any) -> str:
    """Stable row key for a snapshot item.

    Aggregate lines are keyed by their label, holdings by their id, and
    items whose holding was deleted fall back to the stored name.
    """
    if item.is_crypto_total:
        return f"crypto_total:{item.asset_name}"
    if item.asset_id:
        return f"asset:{item.asset_id}"
    return f"name:{item.asset_name}"


def category_label(item: Any) -> str:
    return label_or(item.asset_category_name, UNCATEGORIZED_LABEL)


def _value(item: Any) -> Decimal:
    return item.total_value_brl if item.total_value_brl is not None else ZERO


def pivot_by_asset(groups: Sequence[Any]) -> AssetPivotTable:
    """Build the asset pivot table.

    Args:
        groups: Snapshot groups with ``created_at``, ``id`` and ``items``.

    Returns:
        AssetPivotTable with one column per group (ascending by date), one
        row per asset in first-seen order, and a trailing TOTAL row.
    """
    ordered = sort_groups(groups)
    column_count = len(ordered)

    rows: dict[str, PivotRow] = {}
    for column, group in enumerate(ordered):
        for item in group.items:
            key = asset_identity(item)
            row = rows.get(key)
            if row is None:
                row = PivotRow(
                    key=key,
                    asset_name=item.asset_name,
                    category_name=category_label(item),
                    values=[None] * column_count,
                )
                rows[key] = row
            current = row.values[column]
            row.values[column] = _value(item) if current is None else current + _value(item)

    total_values: list[Optional[Decimal]] = []
    for column in range(column_count):
        present = [row.values[column] for row in rows.values() if row.values[column] is not None]
        total_values.append(sum(present, ZERO) if present else None)

    total_row = PivotRow(
        key=TOTAL_ROW_KEY,
        asset_name=TOTAL_ROW_KEY,
        category_name="",
        values=total_values,
        is_total=True,
    )

    return AssetPivotTable(
        dates=[g.created_at for g in ordered],
        group_ids=[g.id for g in ordered],
        rows=[*rows.values(), total_row],
    )


def pivot_by_date(groups: Sequence[Any], grouping: PivotGrouping) -> StackedSeries:
    """Build a dense stacked series keyed by asset identity or category.

    Every key seen in any group is present, with value 0, at every date.
    """
    ordered = sort_groups(groups)
    key_of = asset_identity if grouping == PivotGrouping.asset else category_label

    labels: dict[str, str] = {}
    for group in ordered:
        for item in group.items:
            key = key_of(item)
            if key not in labels:
                labels[key] = item.asset_name if grouping == PivotGrouping.asset else key
    keys = list(labels)

    points = []
    for group in ordered:
        values = {key: ZERO for key in keys}
        for item in group.items:
            values[key_of(item)] += _value(item)
        points.append(StackedPoint(date=group.created_at, group_id=group.id, values=values))

    return StackedSeries(grouping=grouping, keys=keys, labels=labels, points=points)


def total_value_series(groups: Sequence[Any]) -> list[ValuePoint]:
    """Net worth per snapshot, ascending by date."""
    return [
        ValuePoint(date=g.created_at, group_id=g.id, value=g.total)
        for g in sort_groups(groups)
    ]


def format_pivot_cell(value: Optional[Decimal]) -> str:
    """Render a pivot cell: "—" for missing, two decimals otherwise."""
    if value is None:
        return MISSING_CELL
    return f"{value:.2f}"
