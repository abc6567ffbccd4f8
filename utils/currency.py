"""Display formatting for money. Amounts are stored unformatted."""

CURRENCY_SYMBOL = "$"


def format_currency(amount: float) -> str:
    """
    Format an amount for display: "$" prefix, two decimals.

    Negative amounts keep the sign before the symbol: -5 -> "-$5.00".
    Amounts that round to zero never carry a sign.
    """
    cents = round(amount * 100)
    if cents < 0:
        return f"-{CURRENCY_SYMBOL}{-cents / 100:.2f}"
    return f"{CURRENCY_SYMBOL}{cents / 100:.2f}"
