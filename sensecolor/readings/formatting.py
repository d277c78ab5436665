"""Fixed-width text rendering for converted values.

All numbers go through ``format_value`` so every row shares one numeric
style: right-justified, fixed decimals, ``.`` as decimal separator
regardless of process locale. Column alignment in a monospaced display
depends on these widths staying constant.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

RAW_PLACEHOLDER = "-"
RAW_ENTRIES_PER_LINE = 2
RAW_ENTRY_SEPARATOR = "    "
RAW_MIN_INDEX_WIDTH = 2

NEGATIVE_INFINITY_GLYPH = "-∞"


@dataclass(frozen=True, slots=True)
class FieldFormat:
    """Layout of one line in a multi-line value.

    Parameters
    ----------
    symbol : str
        Leading label, e.g. ``"H"``.
    width, decimals : int
        Numeric field width and precision.
    unit : str
        Suffix glued to the number, e.g. ``"°"``.
    """

    symbol: str
    width: int
    decimals: int
    unit: str = ""


NORMALIZED_RGB_FIELDS = (
    FieldFormat("R", 8, 4),
    FieldFormat("G", 8, 4),
    FieldFormat("B", 8, 4),
)
HSV_FIELDS = (
    FieldFormat("H", 7, 1, "°"),
    FieldFormat("S", 8, 3),
    FieldFormat("V", 8, 3),
)
XYZ_FIELDS = (
    FieldFormat("X", 9, 4),
    FieldFormat("Y", 9, 4),
    FieldFormat("Z", 9, 4),
)
LAB_FIELDS = (
    FieldFormat("L", 8, 2),
    FieldFormat("a", 8, 2),
    FieldFormat("b", 8, 2),
)


def format_value(value: float, width: int = 10, decimals: int = 4) -> str:
    """Render ``value`` right-justified in ``width`` chars with ``decimals`` places."""
    return "%*.*f" % (width, decimals, value)


def format_sentinel(
    glyph: str,
    unit: str,
    unit_width: int = 10,
    value_width: int = 10,
) -> str:
    """Stand-in for a non-finite value, laid out like ``format_value_with_unit``."""
    return f"{glyph.rjust(value_width)} {unit.ljust(unit_width)}"


def format_value_with_unit(
    value: float,
    unit: str,
    unit_width: int = 10,
    value_width: int = 10,
    decimals: int = 2,
) -> str:
    """Render ``value`` followed by a space and ``unit`` padded to ``unit_width``.

    Negative infinity is drawn as ``-∞`` in the value column instead of
    ``-inf``.
    """
    if value == -math.inf:
        return format_sentinel(NEGATIVE_INFINITY_GLYPH, unit, unit_width, value_width)
    return f"{format_value(value, width=value_width, decimals=decimals)} {unit.ljust(unit_width)}"


def format_fields(values: Iterable[float], fields: Sequence[FieldFormat]) -> str:
    """Render one line per field: ``"{symbol} {value}{unit}"``."""
    return "\n".join(
        f"{field.symbol} {format_value(value, field.width, field.decimals)}{field.unit}"
        for field, value in zip(fields, values)
    )


def format_raw(values: Sequence[float]) -> str:
    """Render raw channel values for the ``Raw`` row.

    Empty input gives ``"-"``; a single value is rendered bare. Multiple
    values become ``[idx] value`` entries, two per line::

        [ 0]    12.0000    [ 1]    34.0000
        [ 2]    56.0000    [ 3]    78.0000
    """
    if len(values) == 0:
        return RAW_PLACEHOLDER
    if len(values) == 1:
        return format_value(values[0], width=10, decimals=4)

    index_width = max(RAW_MIN_INDEX_WIDTH, len(str(len(values) - 1)))
    entries = [
        f"[{str(index).rjust(index_width)}] {format_value(value, width=10, decimals=4)}"
        for index, value in enumerate(values)
    ]
    lines = [
        RAW_ENTRY_SEPARATOR.join(entries[start:start + RAW_ENTRIES_PER_LINE])
        for start in range(0, len(entries), RAW_ENTRIES_PER_LINE)
    ]
    return "\n".join(lines)
