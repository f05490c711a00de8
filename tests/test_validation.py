import pytest

from order_totals.engine import LineItem, LineValidationError, validate_lines


def test_clean_lines_are_valid():
    result = validate_lines([LineItem(quantity=1, unit_price=10, tax_percent=18)])
    assert result.valid
    assert result.errors == []
    assert result.warnings == []


def test_empty_is_valid():
    assert validate_lines(None).valid


def test_negative_values_are_warnings_only():
    result = validate_lines([
        LineItem(quantity=-1, unit_price=10),
        LineItem(quantity=1, unit_price=-5, discount_percent=120, tax_percent=-1, excise_amount=-2),
    ])
    assert result.valid
    assert len(result.warnings) == 5
    assert "Line 1" in result.warnings[0]
    assert "return or credit" in result.warnings[0]


def test_non_finite_values_are_errors():
    result = validate_lines([LineItem(quantity=1, unit_price=float("nan")), {"quantity": float("inf")}])
    assert not result.valid
    assert len(result.errors) == 2
    with pytest.raises(LineValidationError) as exc:
        result.raise_for_errors()
    assert exc.value.errors == result.errors


def test_non_numeric_mapping_values_are_errors():
    result = validate_lines([{"quantity": "two", "unitPrice": 10}])
    assert not result.valid
    assert "quantity is not a number" in result.errors[0]


def test_blank_strings_are_absent():
    assert validate_lines([{"quantity": 1, "unitPrice": 10, "taxPercent": " "}]).valid


def test_validation_error_is_value_error():
    assert issubclass(LineValidationError, ValueError)
