import pytest

from pending_payments.classify import classify_field_values
from pending_payments.models import NumberValue, SingleSelectValue, TextValue


def test_pending_status_requires_exact_single_select_name() -> None:
    assert classify_field_values([SingleSelectValue("Pending Payment")]).is_pending_payment
    assert not classify_field_values([SingleSelectValue("pending payment")]).is_pending_payment
    assert not classify_field_values([SingleSelectValue("Done"), TextValue("alice")]).is_pending_payment
    assert not classify_field_values([TextValue("Pending Payment")]).is_pending_payment


def test_text_with_amount_and_symbol_sets_bounty() -> None:
    result = classify_field_values([TextValue("  500 BUIDL  ")])
    assert result.bounty_amount == "500"
    assert result.bounty_symbol == "BUIDL"
    assert result.recipient == ""


def test_text_without_space_before_symbol_sets_nothing() -> None:
    result = classify_field_values([TextValue("250BUIDL")])
    assert result.bounty_amount == ""
    assert result.bounty_symbol == ""
    assert result.recipient == ""


def test_text_with_three_tokens_sets_nothing() -> None:
    result = classify_field_values([TextValue("about 10 BUIDL")])
    assert (result.bounty_amount, result.bounty_symbol, result.recipient) == ("", "", "")


def test_text_containing_symbol_mid_string_is_dropped() -> None:
    result = classify_field_values([TextValue("100BUIDLX"), TextValue("BUIDL team")])
    assert result.recipient == ""
    assert result.bounty_amount == ""


def test_plain_text_becomes_recipient_and_empty_text_is_ignored() -> None:
    result = classify_field_values([TextValue("alice"), TextValue("")])
    assert result.recipient == "alice"


def test_later_text_values_overwrite_earlier_ones() -> None:
    result = classify_field_values(
        [
            TextValue("alice"),
            TextValue("100 BUIDL"),
            TextValue("bob"),
            TextValue("300 BUIDL"),
        ]
    )
    assert result.recipient == "bob"
    assert result.bounty_amount == "300"


@pytest.mark.parametrize(
    ("number", "expected"),
    [(42.0, "42"), (42.9, "42"), (0.5, "0")],
)
def test_positive_number_sets_truncated_bounty(number: float, expected: str) -> None:
    result = classify_field_values([NumberValue(number)])
    assert result.bounty_amount == expected
    assert result.bounty_symbol == "BUIDL"


def test_zero_or_negative_number_sets_nothing() -> None:
    for number in (0.0, -5.0):
        result = classify_field_values([NumberValue(number)])
        assert result.bounty_amount == ""
        assert result.bounty_symbol == ""


def test_number_after_text_bounty_wins_and_text_after_number_wins() -> None:
    number_last = classify_field_values([TextValue("100 TOKEN BUIDL"), TextValue("7 BUIDL"), NumberValue(12)])
    assert (number_last.bounty_amount, number_last.bounty_symbol) == ("12", "BUIDL")

    text_last = classify_field_values([NumberValue(12), TextValue("7 BUIDL")])
    assert text_last.bounty_amount == "7"


def test_extraction_does_not_depend_on_status_position() -> None:
    result = classify_field_values(
        [TextValue("carol"), NumberValue(80), SingleSelectValue("Pending Payment")]
    )
    assert result.is_pending_payment
    assert result.recipient == "carol"
    assert result.bounty_amount == "80"


def test_custom_status_and_symbol() -> None:
    result = classify_field_values(
        [SingleSelectValue("Ready to Pay"), TextValue("5 USDC")],
        status_name="Ready to Pay",
        bounty_symbol="USDC",
    )
    assert result.is_pending_payment
    assert (result.bounty_amount, result.bounty_symbol) == ("5", "USDC")


def test_unknown_value_type_raises() -> None:
    with pytest.raises(TypeError):
        classify_field_values([object()])  # type: ignore[list-item]
