from order_totals.engine.models import LineItem, Totals, coerce_number


def test_from_dict_accepts_camel_case():
    line = LineItem.from_dict({
        "quantity": 2, "unitPrice": 10, "discountPercent": 5, "taxPercent": 18,
        "exciseAmount": 1, "otherFeeAmount": 0.5, "factor": 12,
    })
    assert line.unit_price == 10
    assert line.discount_percent == 5
    assert line.tax_percent == 18
    assert line.excise_amount == 1
    assert line.other_fee_amount == 0.5
    assert line.factor == 12


def test_from_dict_keeps_metadata_in_extra():
    line = LineItem.from_dict({"quantity": 1, "unit_price": 3, "code": "P-1", "warehouse": "W2"})
    assert line.extra == {"code": "P-1", "warehouse": "W2"}
    assert line.to_dict()["warehouse"] == "W2"


def test_from_dict_parses_numeric_strings():
    line = LineItem.from_dict({"quantity": " 3 ", "unit_price": "33.33"})
    assert line.quantity == 3.0
    assert line.unit_price == 33.33


def test_absent_fields_resolve_to_identity_values():
    resolved = LineItem(quantity=2, unit_price=5).resolved()
    assert resolved.factor == 1
    assert resolved.discount_percent == 0
    assert resolved.tax_percent == 0
    assert resolved.excise_amount == 0
    assert resolved.other_fee_amount == 0


def test_explicit_zero_factor_is_kept():
    assert LineItem(quantity=1, unit_price=5, factor=0).resolved().factor == 0


def test_coerce_number():
    assert coerce_number(None) is None
    assert coerce_number("") is None
    assert coerce_number("abc") is None
    assert coerce_number(True) is None
    assert coerce_number(4) == 4
    assert coerce_number("1e2") == 100.0


def test_totals_zero_and_line_count_alias():
    totals = Totals.zero()
    assert totals.line_count == 0
    assert totals.is_finite()
    assert set(totals.to_camel_dict()) == {
        "lineCount", "itemQuantityTotal", "subtotal", "discountTotal", "netAmount",
        "taxTotal", "exciseTotal", "otherFeeTotal", "grandTotal",
    }
