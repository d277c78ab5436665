"""sensecolor: live conversions for ambient-light and color sensor samples.

Turns raw sensor samples into normalized RGB, HSV, CIE XYZ, CIE L*a*b* and
lux-derived photometric quantities, rendered as fixed-width text for
monospaced tables.

Architecture layers (strict one-way dependency):
    scripts/ → sensecolor.cli → sensecolor.readings → sensecolor.utils

Key invariants:
    - Every conversion is a pure function of one raw sample and one profile
    - Output order is fixed: Raw first, then the category's conversions
    - Numeric text is locale-invariant (always '.' as decimal separator)
    - Numeric work runs in float32, matching the sensor service's precision
"""

__version__ = "1.0.0"
