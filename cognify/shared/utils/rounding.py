"""Result rounding.

All reported percentages and ratios use round(value * 100) / 100.
Python's round() breaks exact ties to the even neighbour, so 0.125 -> 0.12
and 0.375 -> 0.38.
"""


def round2(value: float) -> float:
    """Round to 2 decimal places, ties to even on the scaled value."""
    return round(float(value) * 100) / 100
