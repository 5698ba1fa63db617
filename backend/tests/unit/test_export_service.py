"""Tests for CSV export."""

import csv
import io
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from models import SnapshotGroup, SnapshotItem
from services.export_service import (
    export_assets_csv,
    export_crypto_csv,
    export_pivot_csv,
    export_snapshots_csv,
)
from services.snapshot_pivot_service import pivot_by_asset


def _rows(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


class TestExportAssetsCsv:
    def test_header_and_values(self):
        asset = SimpleNamespace(
            name="Tesouro, IPCA",
            ticker="IPCA35",
            category_name="Renda Fixa",
            price=Decimal("3000.5"),
            quantity=Decimal("2"),
            total=Decimal("6001.0"),
            return_value=Decimal("0"),
            return_percentage=Decimal("0"),
        )
        rows = _rows(export_assets_csv([asset]))
        assert rows[0] == [
            "name", "ticker", "category", "price", "quantity", "total", "return_value", "return_percentage",
        ]
        assert rows[1][0] == "Tesouro, IPCA"
        assert rows[1][5] == "6001.0"

    def test_empty_list_writes_header_only(self):
        assert len(_rows(export_assets_csv([]))) == 1


class TestExportCryptoCsv:
    def test_labels_are_resolved(self):
        crypto = SimpleNamespace(
            ticker="BTC", name="Bitcoin", sector_name="Outros", custody_name="Unknown",
            price_usd=Decimal("60000"), quantity=Decimal("0.1"), total_usd=Decimal("6000"),
            total_brl=Decimal("30000"), change_percentage=Decimal("1.5"),
        )
        rows = _rows(export_crypto_csv([crypto]))
        assert rows[1][:4] == ["BTC", "Bitcoin", "Outros", "Unknown"]


class TestExportSnapshotsCsv:
    def test_one_row_per_item(self):
        group = SnapshotGroup(
            id="g1",
            created_at=datetime(2024, 1, 1, 10, 0),
            notes=None,
            items=[
                SnapshotItem(asset_name="CDB", asset_category_name="Renda Fixa", total_value_brl=Decimal("100"), is_crypto_total=False),
                SnapshotItem(asset_name="Total Cripto (R$)", asset_category_name="Cripto Consolidado (Soma)", total_value_brl=Decimal("50"), is_crypto_total=True),
            ],
        )
        rows = _rows(export_snapshots_csv([group]))
        assert len(rows) == 3
        assert rows[1] == ["g1", "2024-01-01T10:00:00", "", "CDB", "Renda Fixa", "100", "False"]


class TestExportPivotCsv:
    def test_missing_cells_render_as_dash(self):
        groups = [
            SnapshotGroup(id="g1", created_at=datetime(2024, 1, 1), items=[
                SnapshotItem(asset_id="a1", asset_name="CDB", asset_category_name="Renda Fixa", total_value_brl=Decimal("100"), is_crypto_total=False),
            ]),
            SnapshotGroup(id="g2", created_at=datetime(2024, 2, 1), items=[
                SnapshotItem(asset_id="a1", asset_name="CDB", asset_category_name="Renda Fixa", total_value_brl=Decimal("110"), is_crypto_total=False),
                SnapshotItem(asset_id="a2", asset_name="PETR4", asset_category_name="Renda Variável BR", total_value_brl=Decimal("50"), is_crypto_total=False),
            ]),
        ]
        rows = _rows(export_pivot_csv(pivot_by_asset(groups)))
        assert rows[0] == ["asset", "category", "2024-01-01", "2024-02-01"]
        assert rows[1] == ["CDB", "Renda Fixa", "100.00", "110.00"]
        assert rows[2] == ["PETR4", "Renda Variável BR", "—", "50.00"]
        assert rows[3] == ["TOTAL", "", "100.00", "160.00"]

    def test_same_day_columns_are_distinct(self):
        groups = [
            SnapshotGroup(id="g1", created_at=datetime(2024, 1, 1, 9), items=[]),
            SnapshotGroup(id="g2", created_at=datetime(2024, 1, 1, 18), items=[]),
        ]
        rows = _rows(export_pivot_csv(pivot_by_asset(groups)))
        assert rows[0] == ["asset", "category", "2024-01-01", "2024-01-01 (2)"]
        assert rows[1] == ["TOTAL", "", "—", "—"]
