# src/transforms/measurement.py

"""Leading-number parsing shared by the normalizer and the aggregator."""

import re

# Sign, digits, optional ".d+" or ",d{1,2}" decimals, then a space, a unit
# or the end
_LEADING_NUMBER_RE = re.compile(
    r"^([-+]?\d+(?:\.\d+|,\d{1,2})?)(?=\s|$|°|F|C)"
)

_MINUS_SIGNS = ("−", "–")  # minus sign, en dash


def parse_leading_number(cell: str) -> float | None:
    """Return the number at the start of *cell*, or ``None``.

    ``"98.6 F"``, ``"75°F"`` and ``"21 °C"`` parse while ``"abc"`` and
    ``"N/A"`` do not.  Typographic minus signs are accepted.  A comma is
    read as a decimal separator only when one or two digits follow it
    (``"21,5 °C"``); a thousands-grouped value such as ``"1,234 F"`` is
    rejected rather than read as ``1.234``.
    """
    text = cell.strip()
    for sign in _MINUS_SIGNS:
        text = text.replace(sign, "-")
    match = _LEADING_NUMBER_RE.match(text)
    if not match:
        return None
    return float(match.group(1).replace(",", "."))
