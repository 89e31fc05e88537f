from __future__ import annotations

import math
from typing import Iterable

from .models import Classification, FieldValue, NumberValue, SingleSelectValue, TextValue

PENDING_PAYMENT_STATUS = "Pending Payment"
BOUNTY_SYMBOL = "BUIDL"


def _truncate_amount(value: float) -> str:
    return str(math.trunc(value))


def classify_field_values(
    values: Iterable[FieldValue],
    *,
    status_name: str = PENDING_PAYMENT_STATUS,
    bounty_symbol: str = BOUNTY_SYMBOL,
) -> Classification:
    """Fold an item's field values, in order, into a Classification.

    Every value is checked against every rule and later values overwrite
    whatever an earlier value set, so the last bounty or recipient text wins.
    Text ending with the bounty symbol is only taken as a bounty when it splits
    into exactly ``<amount> <symbol>``; text that merely contains the symbol is
    ignored.
    """
    result = Classification()
    for value in values:
        if isinstance(value, SingleSelectValue):
            if value.name == status_name:
                result.is_pending_payment = True
        elif isinstance(value, TextValue):
            text = value.text
            if not text:
                continue
            if text.strip().endswith(bounty_symbol):
                parts = text.split()
                if len(parts) == 2:
                    result.bounty_amount, result.bounty_symbol = parts
            elif bounty_symbol not in text:
                result.recipient = text
        elif isinstance(value, NumberValue):
            if value.number > 0:
                result.bounty_amount = _truncate_amount(value.number)
                result.bounty_symbol = bounty_symbol
        else:
            raise TypeError(f"Unsupported field value: {value!r}")
    return result
