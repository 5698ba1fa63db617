"""CSV export of holdings, snapshots and the asset pivot table."""

import csv
import io
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Sequence

from services.snapshot_pivot_service import AssetPivotTable, format_pivot_cell


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _write_csv(headers: list[str], rows: Iterable[dict]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer, fieldnames=headers, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writeheader()
    for row in rows:
        writer.writerow({key: _serialize_value(value) for key, value in row.items()})
    return buffer.getvalue()


def export_assets_csv(assets: Iterable) -> str:
    """Traditional holdings. Columns: name, ticker, category, price, quantity, total, returns."""
    headers = ["name", "ticker", "category", "price", "quantity", "total", "return_value", "return_percentage"]
    return _write_csv(
        headers,
        (
            {
                "name": a.name,
                "ticker": a.ticker,
                "category": a.category_name,
                "price": a.price,
                "quantity": a.quantity,
                "total": a.total,
                "return_value": a.return_value,
                "return_percentage": a.return_percentage,
            }
            for a in assets
        ),
    )


def export_crypto_csv(cryptos: Iterable) -> str:
    """Crypto holdings with both USD and BRL totals."""
    headers = [
        "ticker", "name", "sector", "custody", "price_usd", "quantity",
        "total_usd", "total_brl", "change_percentage",
    ]
    return _write_csv(
        headers,
        (
            {
                "ticker": c.ticker,
                "name": c.name,
                "sector": c.sector_name,
                "custody": c.custody_name,
                "price_usd": c.price_usd,
                "quantity": c.quantity,
                "total_usd": c.total_usd,
                "total_brl": c.total_brl,
                "change_percentage": c.change_percentage,
            }
            for c in cryptos
        ),
    )


def export_snapshots_csv(groups: Sequence) -> str:
    """One row per snapshot item, groups in the order given."""
    headers = [
        "snapshot_id", "created_at", "notes", "asset_name", "category",
        "total_value_brl", "is_crypto_total",
    ]
    rows = []
    for group in groups:
        for item in group.items:
            rows.append(
                {
                    "snapshot_id": group.id,
                    "created_at": group.created_at,
                    "notes": group.notes,
                    "asset_name": item.asset_name,
                    "category": item.asset_category_name,
                    "total_value_brl": item.total_value_brl,
                    "is_crypto_total": item.is_crypto_total,
                }
            )
    return _write_csv(headers, rows)


def export_pivot_csv(table: AssetPivotTable) -> str:
    """The asset pivot table; absent cells are written as "—"."""
    date_headers = [d.date().isoformat() for d in table.dates]
    # Two snapshots on the same day still need distinct columns.
    seen: dict[str, int] = {}
    unique_headers = []
    for header in date_headers:
        seen[header] = seen.get(header, 0) + 1
        unique_headers.append(header if seen[header] == 1 else f"{header} ({seen[header]})")

    headers = ["asset", "category", *unique_headers]
    rows = []
    for row in table.rows:
        record = {"asset": row.asset_name, "category": row.category_name}
        for header, value in zip(unique_headers, row.values):
            record[header] = format_pivot_cell(value)
        rows.append(record)
    return _write_csv(headers, rows)
