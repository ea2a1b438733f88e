from decimal import Decimal

import pytest

from introlink.contracts.search_v1 import Receipt
from introlink.orchestrators.search.errors import ProtocolError
from introlink.orchestrators.search.models import BackendReply
from introlink.orchestrators.search.receipts import ReceiptReconciler


@pytest.fixture
def reconciler() -> ReceiptReconciler:
    return ReceiptReconciler("jobs")


def test_receipt_passes_through_exactly(reconciler):
    success = reconciler.reconcile(
        7,
        BackendReply(items=["x", "y"], receipt={"provider": "acme", "amount_paid_usd": 0.0123}),
    )

    assert success.request_id == 7
    assert success.items == ("x", "y")
    assert success.receipt == Receipt(provider="acme", amount_paid_usd=0.0123)
    assert success.receipt.amount_paid_usd == Decimal("0.0123")


def test_missing_receipt_stays_absent(reconciler):
    success = reconciler.reconcile(1, BackendReply(items=[{"id": 1}]))

    assert success.receipt is None
    assert success.cost_per_item is None


def test_zero_cost_receipt_is_distinct_from_absent(reconciler):
    success = reconciler.reconcile(
        1, BackendReply(items=[], receipt={"provider": "mock-job-provider", "amount_paid_usd": 0})
    )

    assert success.receipt is not None
    assert success.receipt.amount_paid_usd == 0
    assert success.items == ()


def test_paid_empty_result_is_surfaced(reconciler):
    success = reconciler.reconcile(
        3, BackendReply(items=[], receipt={"provider": "acme", "amount_paid_usd": 0.02})
    )
    assert success.items == ()
    assert success.receipt.amount_paid_usd == Decimal("0.02")
    assert success.cost_per_item is None


def test_cost_per_item_splits_amount(reconciler):
    success = reconciler.reconcile(
        2, BackendReply(items=[1, 2, 3, 4], receipt={"provider": "acme", "amount_paid_usd": 0.02})
    )
    assert success.cost_per_item == Decimal("0.005")


def test_malformed_receipt_is_protocol_error(reconciler):
    with pytest.raises(ProtocolError) as exc_info:
        reconciler.reconcile(1, BackendReply(items=[], receipt={"amount_paid_usd": "lots"}))
    assert "receipt" in exc_info.value.message.lower()


def test_long_decimal_amount_is_not_rounded(reconciler):
    amount = Decimal("0.012345678901234567890123")
    success = reconciler.reconcile(
        1, BackendReply(items=["x"], receipt={"provider": "acme", "amount_paid_usd": amount})
    )
    assert success.receipt.amount_paid_usd == amount
    assert success.to_dict()["receipt"]["amount_paid_usd"] == "0.012345678901234567890123"
