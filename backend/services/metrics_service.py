"""Live dashboard metrics computed from already-loaded holdings.

Every function here is pure: it takes plain objects (ORM rows or anything
exposing the same attributes) and returns dataclasses. Division by zero is
always guarded and yields ``Decimal("0")``.
"""

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

from utils.labels import UNCATEGORIZED_LABEL

ZERO = Decimal("0")
HUNDRED = Decimal("100")

STABLECOIN_MARKER = "stablecoin"


@dataclass
class TabMetrics:
    """Summary figures for one tab (a homogeneous list of holdings)."""

    total: Decimal
    asset_count: int
    average_return: Decimal
    percent_of_portfolio: Decimal
    largest_position: Optional[Any]
    largest_position_percentage: Decimal


@dataclass
class SectorAllocation:
    """One crypto sector's share of the crypto total (in USD)."""

    sector_name: str
    total_usd: Decimal
    percentage: Decimal


@dataclass
class CryptoMetrics:
    """Summary figures for the crypto holdings."""

    total_usd: Decimal
    total_brl: Decimal
    crypto_count: int
    portfolio_percentage: Decimal
    top_custody: Optional[str]
    stablecoins_total: Decimal
    sector_allocation: list[SectorAllocation] = field(default_factory=list)


@dataclass
class ClassAllocation:
    """One category's share of the traditional holdings."""

    class_name: str
    total_brl: Decimal
    percentage: Decimal


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100``, or 0 when ``whole`` is 0."""
    if not whole:
        return ZERO
    return part / whole * HUNDRED


def _decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compute_tab_metrics(holdings: Sequence[Any], portfolio_total: Decimal) -> TabMetrics:
    """Compute the metrics shown on top of a holdings tab.

    Args:
        holdings: Holdings with ``total`` and ``return_percentage`` attributes.
        portfolio_total: Denominator for the percent-of-portfolio figure.

    Returns:
        TabMetrics. The largest position is the first holding (in input
        order) carrying the maximal positive total; None if there is none.
    """
    total = sum((_decimal(h.total) for h in holdings), ZERO)

    average_return = ZERO
    if total != 0:
        weighted = sum(
            (_decimal(h.return_percentage) * _decimal(h.total) for h in holdings),
            ZERO,
        )
        average_return = weighted / total

    largest = None
    largest_value = ZERO
    for holding in holdings:
        value = _decimal(holding.total)
        if value > largest_value:
            largest = holding
            largest_value = value

    largest_percentage = ZERO
    if largest is not None and total > 0:
        largest_percentage = largest_value / total * HUNDRED

    return TabMetrics(
        total=total,
        asset_count=len(holdings),
        average_return=average_return,
        percent_of_portfolio=percent_of(total, _decimal(portfolio_total)),
        largest_position=largest,
        largest_position_percentage=largest_percentage,
    )


def _top_label(labels: Iterable[str]) -> Optional[str]:
    """Most frequent label; ties go to the label seen first."""
    counts = Counter()
    for label in labels:
        counts[label] += 1
    if not counts:
        return None
    # Counter preserves insertion order, and max() keeps the first maximum.
    return max(counts, key=lambda label: counts[label])


def compute_sector_allocation(cryptos: Sequence[Any]) -> list[SectorAllocation]:
    """Group crypto holdings by sector, sorted by USD total descending."""
    totals: dict[str, Decimal] = {}
    for crypto in cryptos:
        totals[crypto.sector_name] = totals.get(crypto.sector_name, ZERO) + _decimal(crypto.total_usd)

    crypto_total = sum(totals.values(), ZERO)
    allocation = [
        SectorAllocation(
            sector_name=name,
            total_usd=value,
            percentage=percent_of(value, crypto_total),
        )
        for name, value in totals.items()
    ]
    allocation.sort(key=lambda item: item.total_usd, reverse=True)
    return allocation


def compute_crypto_metrics(
    cryptos: Sequence[Any], portfolio_total: Decimal, conversion_rate: Decimal
) -> CryptoMetrics:
    """Compute the crypto page summary.

    Args:
        cryptos: Holdings with ``total_usd``, ``custody_name`` and
            ``sector_name`` attributes.
        portfolio_total: Global portfolio total in BRL.
        conversion_rate: USD to BRL rate used for the BRL total.
    """
    total_usd = sum((_decimal(c.total_usd) for c in cryptos), ZERO)
    total_brl = total_usd * _decimal(conversion_rate)

    stablecoins_total = sum(
        (
            _decimal(c.total_usd)
            for c in cryptos
            if STABLECOIN_MARKER in c.sector_name.lower()
        ),
        ZERO,
    )

    return CryptoMetrics(
        total_usd=total_usd,
        total_brl=total_brl,
        crypto_count=len(cryptos),
        portfolio_percentage=percent_of(total_brl, _decimal(portfolio_total)),
        top_custody=_top_label(c.custody_name for c in cryptos),
        stablecoins_total=stablecoins_total,
        sector_allocation=compute_sector_allocation(cryptos),
    )


def compute_class_allocation(holdings: Sequence[Any]) -> list[ClassAllocation]:
    """Group traditional holdings by category label, largest first."""
    totals: dict[str, Decimal] = {}
    for holding in holdings:
        name = getattr(holding, "category_name", None) or UNCATEGORIZED_LABEL
        totals[name] = totals.get(name, ZERO) + _decimal(holding.total)

    overall = sum(totals.values(), ZERO)
    allocation = [
        ClassAllocation(class_name=name, total_brl=value, percentage=percent_of(value, overall))
        for name, value in totals.items()
    ]
    allocation.sort(key=lambda item: item.total_brl, reverse=True)
    return allocation


def compute_portfolio_total(
    assets: Iterable[Any], cryptos: Iterable[Any], conversion_rate: Decimal
) -> Decimal:
    """Net worth in BRL: traditional totals plus crypto USD totals at ``conversion_rate``."""
    assets_total = sum((_decimal(a.total) for a in assets), ZERO)
    crypto_total = sum((_decimal(c.total_usd) for c in cryptos), ZERO) * _decimal(conversion_rate)
    return assets_total + crypto_total
