"""Conversion between smallest-unit integers and human decimal strings."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext


def _scale(human: Decimal, decimals: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 100
        return human.scaleb(decimals)


def format_units(raw: int, decimals: int) -> str:
    """
    Exact decimal rendering of ``raw`` with trailing zeros trimmed.

    Integer arithmetic only, so 256-bit amounts keep every digit.
    """
    if not isinstance(raw, int):
        raise TypeError("raw must be int")
    sign = "-" if raw < 0 else ""
    whole, frac = divmod(abs(raw), 10**decimals)
    if decimals == 0 or frac == 0:
        return f"{sign}{whole}"
    frac_text = str(frac).rjust(decimals, "0").rstrip("0")
    return f"{sign}{whole}.{frac_text}"


def parse_units(value: str, decimals: int) -> int:
    """Strict parse of a human amount; rejects precision beyond ``decimals``."""
    if isinstance(value, float):
        raise TypeError("value must be a string or Decimal, not float")
    try:
        human = Decimal(str(value).strip().replace("_", ""))
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {value!r}") from exc
    if not human.is_finite():
        raise ValueError(f"invalid amount: {value!r}")
    raw = _scale(human, decimals)
    if raw != raw.to_integral_value():
        raise ValueError("amount has more precision than decimals allow")
    return int(raw)


def parse_amount(value: str | None, decimals: int) -> int:
    """
    Lenient parse for input fields: empty, invalid or negative text is 0 and
    excess precision is truncated.
    """
    if value is None:
        return 0
    text = str(value).strip()
    if text == "":
        return 0
    try:
        human = Decimal(text)
    except InvalidOperation:
        return 0
    if not human.is_finite() or human <= 0:
        return 0
    return int(_scale(human, decimals).to_integral_value(rounding=ROUND_DOWN))


def format_balance(raw: int, decimals: int, display_decimals: int = 6) -> str:
    if raw == 0:
        return "0"
    human = Decimal(format_units(raw, decimals))
    if human < Decimal("0.000001"):
        return "<0.000001"
    quantum = Decimal(1).scaleb(-display_decimals)
    with localcontext() as ctx:
        ctx.prec = 100
        text = str(human.quantize(quantum, rounding=ROUND_DOWN))
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
