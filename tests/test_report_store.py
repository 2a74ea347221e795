"""
Tests for the file-backed ReportStore.
"""
import json
import pytest
from charges_return.common.exceptions import ReportDateMissingError, ReportNotFoundError
from charges_return.common.models import ChargeRow, ParseResult, ReportDate
from charges_return.parsing.pipeline import parse_report
from charges_return.parsing.config.layout import ReportLayout, DEFAULT_LAYOUT
from charges_return.parsing.config.registry import LayoutRegistry
from charges_return.storage.report_store import ReportStore


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def store(tmp_path):
    return ReportStore(tmp_path / "reports")


@pytest.fixture
def parsed(sample_report):
    return parse_report(sample_report)


def _result(iso, label, rows=None):
    return ParseResult(report_date=ReportDate(iso=iso, label=label), rows=rows or [])


# ============================================================================
# TEST: save / load
# ============================================================================

class TestSaveLoad:

    def test_round_trip(self, store, parsed):
        stored = store.save(parsed)
        assert stored.report_id == "2024-03-07"

        loaded = store.load("2024-03-07")
        assert loaded.result == parsed
        assert loaded.include_totals is True
        assert loaded.imported_at == stored.imported_at

    def test_blank_amounts_survive(self, store, parsed):
        store.save(parsed)
        rows = {r.label: r for r in store.load("2024-03-07").result.rows}
        assert rows["STATIONERY & PRINTING"].prior_total is None
        assert rows["TOTAL CHARGES UPTO PREVIOUS MONTH"].prior_total is None

    def test_document_layout(self, store, parsed):
        store.save(parsed, include_summaries=False)
        document = json.loads((store.storage_dir / "2024-03-07.json").read_text(encoding="utf-8"))
        assert document["report"]["report_date_label"] == "Mar 7, 2024"
        assert document["report"]["include_totals"] is False
        assert document["report"]["row_count"] == len(parsed.rows)
        assert document["rows"][0]["label"] == "ELECTRICITY & GAS CHARGES"
        assert not list(store.storage_dir.glob("*.tmp"))

    def test_missing_date_rejected(self, store):
        result = ParseResult(report_date=ReportDate.missing(), rows=[ChargeRow("RENT", 1.0, None, 1.0)])
        with pytest.raises(ReportDateMissingError) as exc:
            store.save(result)
        assert exc.value.row_count == 1
        assert store.list_reports() == []

    def test_resave_replaces(self, store, parsed):
        store.save(parsed)
        store.save(_result("2024-03-07", "Mar 7, 2024", [ChargeRow("RENT", 5.0, None, 5.0)]))

        loaded = store.load("2024-03-07")
        assert [r.label for r in loaded.result.rows] == ["RENT"]
        assert len(store.list_reports()) == 1

    def test_load_reorders_rows(self, store):
        (store.storage_dir / "2024-01-31.json").write_text(json.dumps({
            "report": {"report_id": "2024-01-31", "report_date_iso": "2024-01-31",
                       "report_date_label": "Jan 31, 2024"},
            "rows": [
                {"label": "BALANCE AS PER GENERAL LEDGER", "month_amount": 900.0, "prior_total": None},
                {"label": "RENT", "month_amount": 100.0, "prior_total": 50.0},
                {"label": "LIGHTING", "month_amount": 300.0, "prior_total": None},
            ],
        }), encoding="utf-8")

        rows = store.load("2024-01-31").result.rows
        assert [r.label for r in rows] == ["LIGHTING", "RENT", "BALANCE AS PER GENERAL LEDGER"]
        assert rows[1].as_on_total == 150.0

    def test_load_unknown(self, store):
        with pytest.raises(ReportNotFoundError):
            store.load("2020-01-01")

    @pytest.mark.parametrize("report_id", ["../secrets", "a/b", "..\\x", ".hidden", ""])
    def test_bad_ids(self, store, report_id):
        with pytest.raises(ReportNotFoundError):
            store.load(report_id)
        assert store.exists(report_id) is False


# ============================================================================
# TEST: listing / deletion
# ============================================================================

class TestListDelete:

    def test_list_newest_first(self, store):
        store.save(_result("2024-01-31", "Jan 31, 2024"))
        store.save(_result("2024-03-07", "Mar 7, 2024"))
        store.save(_result("2023-12-31", "Dec 31, 2023"))

        ids = [r["report_id"] for r in store.list_reports()]
        assert ids == ["2024-03-07", "2024-01-31", "2023-12-31"]

    def test_list_skips_corrupt_file(self, store):
        store.save(_result("2024-01-31", "Jan 31, 2024"))
        (store.storage_dir / "broken.json").write_text("{", encoding="utf-8")
        assert len(store.list_reports()) == 1

    def test_delete(self, store, parsed):
        store.save(parsed)
        assert store.exists("2024-03-07")
        assert store.delete("2024-03-07") is True
        assert store.exists("2024-03-07") is False
        assert store.delete("2024-03-07") is False

    def test_clear(self, store):
        store.save(_result("2024-01-31", "Jan 31, 2024"))
        store.save(_result("2024-02-29", "Feb 29, 2024"))
        assert store.clear() == 2
        assert store.list_reports() == []


# ============================================================================
# TEST: layouts
# ============================================================================

class TestLayoutOrdering:

    @pytest.fixture
    def layout(self):
        return ReportLayout(name="Region Abstract", summary_phrases=["GRAND TOTAL"])

    @pytest.fixture
    def result(self):
        return _result("2024-04-30", "Apr 30, 2024", [
            ChargeRow("RENT", 100.0, None, 100.0),
            ChargeRow("GRAND TOTAL", 900.0, None, 900.0),
        ])

    def test_layout_recorded(self, store, result, layout):
        stored = store.save(result, layout=layout)
        assert stored.metadata["layout"] == "Region Abstract"

        document = json.loads((store.storage_dir / "2024-04-30.json").read_text(encoding="utf-8"))
        assert document["report"]["layout"] == "Region Abstract"

    def test_default_layout_recorded(self, store, parsed):
        assert store.save(parsed).layout_name == DEFAULT_LAYOUT.name
        assert store.load("2024-03-07").layout_name == DEFAULT_LAYOUT.name

    def test_load_orders_with_saved_layout(self, tmp_path, result, layout):
        registry = LayoutRegistry(tmp_path / "layouts")
        registry.save_layout(layout)
        store = ReportStore(tmp_path / "reports", registry=registry)

        store.save(result, layout=layout)
        loaded = store.load("2024-04-30")
        assert [r.label for r in loaded.result.rows] == ["RENT", "GRAND TOTAL"]
        assert loaded.layout_name == "Region Abstract"

    def test_unknown_layout_falls_back_to_default(self, store, result, layout):
        store.save(result, layout=layout)
        loaded = store.load("2024-04-30")
        assert [r.label for r in loaded.result.rows] == ["GRAND TOTAL", "RENT"]
        assert loaded.layout_name == "Region Abstract"
