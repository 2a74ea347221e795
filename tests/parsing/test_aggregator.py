"""
Unit tests for the row finaliser and the aggregator.

Tests cover:
- as-on total derivation
- head inclusion filter
- last-wins deduplication
- data/summary partition and ordering
"""
import pytest
from charges_return.common.models import ChargeRow, ExtractedPair
from charges_return.parsing.rows import finalize
from charges_return.parsing.aggregator import (
    aggregate, order_rows, is_summary_row, should_include_head, summary_rank, dedupe_last_wins,
)


def row(label, month=None, prior=None):
    return finalize(ExtractedPair(label=label, primary_amount=month, secondary_amount=prior))


# =============================================================================
# TEST: finalize
# =============================================================================

class TestFinalize:

    def test_both_amounts(self):
        r = finalize(ExtractedPair("Rent", 1250.50, 3000.0))
        assert r == ChargeRow(label="Rent", month_amount=1250.50, prior_total=3000.0, as_on_total=4250.50)

    def test_month_only(self):
        r = finalize(ExtractedPair("Rent", 100.0, None))
        assert r.prior_total is None
        assert r.as_on_total == 100.0

    def test_prior_only(self):
        r = finalize(ExtractedPair("Rent", None, 75.5))
        assert r.month_amount is None
        assert r.as_on_total == 75.5

    def test_no_amounts_gives_zero(self):
        assert finalize(ExtractedPair("Rent")).as_on_total == 0


# =============================================================================
# TEST: head inclusion filter
# =============================================================================

class TestShouldIncludeHead:

    @pytest.mark.parametrize("label", [
        "TOTAL CHARGES FOR THE MONTH",
        "Total Charges upto previous month",
        "BALANCE AS PER GENERAL LEDGER",
        "BALANCE AS PER BOOKS",
        "MISCELLANEOUS",
        "miscellaneous",
        "  MISCELLANEOUS  ",
    ])
    def test_excluded_when_summaries_off(self, label):
        assert should_include_head(label, include_summaries=False) is False

    @pytest.mark.parametrize("label", [
        "RENT",
        "MISCELLANEOUS EXPENSES",
        "SUB TOTAL CHARGES",
    ])
    def test_kept_when_summaries_off(self, label):
        assert should_include_head(label, include_summaries=False) is True

    def test_everything_kept_when_summaries_on(self):
        assert should_include_head("MISCELLANEOUS", include_summaries=True) is True
        assert should_include_head("TOTAL CHARGES FOR THE MONTH", include_summaries=True) is True


# =============================================================================
# TEST: summary classification
# =============================================================================

class TestSummaryRows:

    def test_phrases(self):
        assert is_summary_row("TOTAL CHARGES FOR THE MONTH")
        assert is_summary_row("TOTAL CHARGES UPTO PREVIOUS MONTH")
        assert is_summary_row("BALANCE AS PER GENERAL LEDGER")

    def test_phrase_inside_label(self):
        assert is_summary_row("** total charges for the month **")

    def test_data_rows(self):
        assert not is_summary_row("RENT")
        assert not is_summary_row("TOTAL CHARGES")
        assert not is_summary_row("MISCELLANEOUS")

    def test_rank_follows_phrase_order(self):
        assert summary_rank("BALANCE AS PER GENERAL LEDGER") == 2
        assert summary_rank("TOTAL CHARGES FOR THE MONTH") == 0
        assert summary_rank("RENT") == -1


# =============================================================================
# TEST: aggregate
# =============================================================================

class TestAggregate:

    def test_sort_order_scenario(self):
        rows = [row("A", 100), row("B", None, 10), row("C", 250)]
        result = aggregate(rows, include_summaries=True)
        assert [r.label for r in result] == ["C", "A", "B"]

    def test_last_occurrence_wins(self):
        rows = [row("Rent", 100, 1000), row("Phone", 50), row("Rent", 300, 900)]
        result = aggregate(rows, include_summaries=True)
        rents = [r for r in result if r.label == "Rent"]
        assert len(rents) == 1
        assert rents[0].month_amount == 300
        assert rents[0].prior_total == 900
        assert rents[0].as_on_total == 1200

    def test_dedup_does_not_sum(self):
        rows = [row("Rent", 100), row("Rent", 100)]
        assert aggregate(rows, True)[0].month_amount == 100

    def test_dedup_is_case_sensitive(self):
        rows = [row("Rent", 100), row("RENT", 200)]
        assert len(aggregate(rows, True)) == 2

    def test_dedup_keeps_first_position(self):
        rows = [row("A", 1), row("B", 2), row("A", 3)]
        assert [r.label for r in dedupe_last_wins(rows)] == ["A", "B"]

    def test_summaries_after_data(self):
        rows = [
            row("BALANCE AS PER GENERAL LEDGER", 9000),
            row("Rent", 10),
            row("TOTAL CHARGES UPTO PREVIOUS MONTH", 5000),
            row("Phone", None, 20),
            row("TOTAL CHARGES FOR THE MONTH", 40),
        ]
        result = aggregate(rows, include_summaries=True)
        assert [r.label for r in result] == [
            "Rent",
            "Phone",
            "TOTAL CHARGES FOR THE MONTH",
            "TOTAL CHARGES UPTO PREVIOUS MONTH",
            "BALANCE AS PER GENERAL LEDGER",
        ]

    def test_excluding_summaries(self):
        rows = [
            row("Rent", 10),
            row("MISCELLANEOUS", 5),
            row("TOTAL CHARGES FOR THE MONTH", 15),
            row("BALANCE AS PER GENERAL LEDGER", 15),
        ]
        result = aggregate(rows, include_summaries=False)
        assert [r.label for r in result] == ["Rent"]

    def test_filter_before_dedup(self):
        """An excluded head never replaces a kept one."""
        rows = [row("Rent", 10), row("MISCELLANEOUS", 5)]
        assert len(aggregate(rows, include_summaries=False)) == 1

    def test_ties_keep_source_order(self):
        rows = [row("X", 100), row("Y", 100), row("Z", None), row("W", None)]
        assert [r.label for r in aggregate(rows, True)] == ["X", "Y", "Z", "W"]

    def test_negative_amount_sorts_above_blank(self):
        rows = [row("Blank", None, 5), row("Refund", -50)]
        assert [r.label for r in aggregate(rows, True)] == ["Refund", "Blank"]

    def test_empty(self):
        assert aggregate([], include_summaries=True) == []

    def test_order_rows_is_idempotent(self):
        rows = [row("B", 1), row("TOTAL CHARGES FOR THE MONTH", 3), row("A", 2)]
        once = order_rows(rows)
        assert order_rows(once) == once
