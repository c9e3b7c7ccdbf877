"""Cost parsing - the only way raw money values enter arithmetic."""

import math
import re
from decimal import Decimal, InvalidOperation

_NUMBER_RE = re.compile(r"\d+(\.\d+)?")


def parse_cost(raw: object) -> Decimal:
    """Parse a bare number or a decorated string such as "NT$1,250.50".

    Thousands separators are dropped and the first integer or decimal
    substring is used. Anything unreadable yields 0.
    """
    if raw is None or isinstance(raw, bool):
        return Decimal(0)
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else Decimal(0)
    if isinstance(raw, int):
        return Decimal(raw)
    if isinstance(raw, float):
        return Decimal(str(raw)) if math.isfinite(raw) else Decimal(0)

    match = _NUMBER_RE.search(str(raw).replace(",", ""))
    if not match:
        return Decimal(0)
    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return Decimal(0)
