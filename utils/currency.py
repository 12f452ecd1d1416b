"""INR display formatting with Indian digit grouping.

Grouping is 3 digits from the right, then groups of 2 (lakh/crore):

>>> format_indian_number(1234567)
'12,34,567'
>>> format_inr(1234567.5)
'₹12,34,567.50'

Pure string manipulation, no locale dependence. Stored amounts are never
rounded; rounding happens here, at display time only.
"""

from decimal import Decimal, ROUND_HALF_UP

Number = int | float | Decimal


def format_indian_number(value: Number) -> str:
    """Format a number using Indian digit grouping. Decimals are kept as given."""
    if isinstance(value, Decimal):
        num_str = format(value, "f")
    else:
        num_str = str(value)

    sign = ""
    if num_str.startswith("-"):
        sign, num_str = "-", num_str[1:]

    whole, _, frac = num_str.partition(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return sign + whole + ("." + frac if frac else "")


def format_inr(value: Number, symbol: bool = True) -> str:
    """
    Format a number as INR with Indian grouping and exactly two decimals.

    Rounds half-up at two decimal places.
    """
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = format_indian_number(amount)
    return ("₹" + text) if symbol else text
