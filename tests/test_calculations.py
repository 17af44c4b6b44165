from datetime import datetime
from decimal import Decimal

import pytest

from app.services.billing.calculations import (
    calculate_balance,
    calculate_profit,
    calculate_quotation_total,
    is_workflow_pending,
    order_financials,
    resolve_budget,
    workflow_label,
)
from app.services.billing.numbering import parse_sequence, sequence_stem, with_random_suffix
from app.utils.decimal_utils import format_inr, to_decimal


def test_total_is_sum_of_rates_only():
    services = {
        "photography": [{"rate": 20000, "camera_count": 3, "session": "2 Sessions"}],
        "additional": [{"rate": 5000, "quantity": 3}],
    }
    assert calculate_quotation_total(services) == Decimal("25000.00")


def test_total_ignores_camera_count_and_quantity():
    one = {"videography": [{"rate": "15000", "camera_count": 1}]}
    many = {"videography": [{"rate": "15000", "camera_count": 4}]}
    assert calculate_quotation_total(one) == calculate_quotation_total(many)


def test_total_of_empty_services_is_zero():
    assert calculate_quotation_total({}) == Decimal("0.00")
    assert calculate_quotation_total(None) == Decimal("0.00")


def test_budget_prefers_final_then_estimated():
    assert resolve_budget(Decimal("90000"), Decimal("100000")) == Decimal("90000.00")
    assert resolve_budget(None, Decimal("100000")) == Decimal("100000.00")
    assert resolve_budget(None, None) == Decimal("0.00")


def test_final_budget_of_zero_is_kept():
    assert resolve_budget(Decimal("0"), Decimal("50000")) == Decimal("0.00")


def test_order_rollup():
    fin = order_financials(Decimal("100000"), None, [Decimal("30000")], [Decimal("40000")])
    assert fin["balance"] == Decimal("60000.00")
    assert fin["profit"] == Decimal("70000.00")
    assert fin["payment_percentage"] == Decimal("40.00")
    assert fin["profit_margin"] == Decimal("70.00")


def test_balance_never_negative_profit_can_be():
    assert calculate_balance(10000, 25000) == Decimal("0.00")
    assert calculate_profit(10000, 25000) == Decimal("-15000.00")


def test_percentages_are_zero_for_zero_budget():
    fin = order_financials(None, None, [100], [100])
    assert fin["profit_margin"] == Decimal("0.00")
    assert fin["payment_percentage"] == Decimal("0.00")


def test_workflow_pending_when_any_field_is_no():
    status = {
        "photo_selection": "Yes",
        "album_design": "Not needed",
        "album_printing": "Yes",
        "video_editing": "Yes",
        "outdoor_shoot": "Not needed",
        "album_delivery": "No",
    }
    assert is_workflow_pending(status)
    status["album_delivery"] = "Yes"
    assert not is_workflow_pending(status)
    assert workflow_label(status) == "completed"


def test_sequence_helpers():
    stem = sequence_stem("Q-AKP", datetime(2026, 3, 1))
    assert stem == "Q-AKP-26-"
    assert parse_sequence("Q-AKP-26-0042", stem) == 42
    assert parse_sequence("Q-AKP-26-0042-9F1C", stem) == 42
    assert parse_sequence("Q-AKP-25-0042", stem) is None
    assert with_random_suffix("Q-AKP-26-0001").startswith("Q-AKP-26-0001-")


def test_money_helpers():
    assert format_inr(Decimal("125000")) == "Rs. 1,25,000.00"
    assert format_inr(999) == "Rs. 999.00"
    assert to_decimal("") == Decimal("0.00")
    with pytest.raises(ValueError):
        to_decimal("abc")
