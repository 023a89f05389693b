"""
Price token normalization.

Turns human-written prices such as "1.5b", "250k" or "1,200" into a
comparable number. Malformed or missing tokens normalize to 0 rather
than raising; callers rely on 0 as a safe default.
"""

import re

# Checked in this order, regardless of where the letter sits in the token.
MAGNITUDES: tuple[tuple[str, float], ...] = (
    ("b", 1_000_000_000),
    ("m", 1_000_000),
    ("k", 1_000),
)

THOUSANDS_SEPARATOR = ","

# Leading decimal number, same prefix rule as JavaScript's parseFloat.
# ASCII digits only: \d would also accept Arabic-Indic and other Unicode digits.
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def _parse_leading_float(text: str) -> float | None:
    match = _NUMBER_PREFIX.match(text)
    if not match:
        return None
    return float(match.group(1))


def parse_price(token: str | None) -> float:
    """
    Convert a price token into a number.

    Args:
        token: Price as written by a human, e.g. "1.2b", "950k", "75"

    Returns:
        Non-negative numeric price. 0 for empty or unparseable tokens.
    """
    if not token:
        return 0

    lowered = token.casefold().replace(THOUSANDS_SEPARATOR, "")

    multiplier: float = 1
    for letter, factor in MAGNITUDES:
        if letter in lowered:
            multiplier = factor
            break

    for letter, _ in MAGNITUDES:
        lowered = lowered.replace(letter, "")

    value = _parse_leading_float(lowered)
    if value is None or value <= 0:
        return 0

    return value * multiplier


# Public name used by sorting/filtering features built on the engine.
price_token_to_number = parse_price
