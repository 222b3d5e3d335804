"""Unit conversions between millimetres and PDF points."""

POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4
PT_PER_MM = POINTS_PER_INCH / MM_PER_INCH


def mm_to_points(value: float) -> float:
    return float(value) * PT_PER_MM


def points_to_mm(value: float) -> float:
    return float(value) / PT_PER_MM
