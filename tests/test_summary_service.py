"""Tests for summary service."""

from decimal import Decimal

from moneyfornothing.domain.bills import BillService
from moneyfornothing.domain.summary_service import SummaryService


def test_summary_of_first_run(store):
    summary = SummaryService(store).build_summary()

    assert summary.income.total == Decimal("0")
    assert summary.bills.progress == 0
    assert summary.remaining_cash == Decimal("0")


def test_summary_follows_changes(sample_store):
    service = SummaryService(sample_store)
    assert service.build_summary().remaining_cash == Decimal("4400.50")

    electric = BillService(sample_store).get_bill("bill-2")
    BillService(sample_store).toggle_paid(electric.id)

    summary = service.build_summary()
    assert summary.remaining_cash == Decimal("4550.50")
    assert summary.bills.progress == 100
