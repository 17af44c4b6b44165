# app/utils/decimal_utils.py
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")

def to_decimal(value) -> Decimal:
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    try:
        return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Not a monetary amount: {value!r}")


def sum_amounts(values) -> Decimal:
    return sum((to_decimal(v) for v in values), ZERO)


def format_inr(value) -> str:
    """Render an amount the way the studio's documents print it, e.g. Rs. 1,25,000.00"""
    amount = to_decimal(value)
    sign = "-" if amount < 0 else ""
    whole, frac = f"{abs(amount):.2f}".split(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    return f"{sign}Rs. {whole}.{frac}"
