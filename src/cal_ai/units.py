"""Unit conversions and display formatting."""

import math

from cal_ai.domain.profile import UnitSystem

LBS_IN_KG = 2.20462262185
INCHES_IN_CM = 0.393701
INCHES_IN_FOOT = 12


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms."""
    return lbs / LBS_IN_KG


def kg_to_lbs(kg: float) -> float:
    """Convert kilograms to pounds."""
    return kg * LBS_IN_KG


def inches_to_cm(inches: float) -> float:
    """Convert inches to centimetres."""
    return inches / INCHES_IN_CM


def cm_to_inches(cm: float) -> float:
    """Convert centimetres to inches."""
    return cm * INCHES_IN_CM


def format_weight(weight_lbs: float, unit_system: UnitSystem) -> str:
    """Format a stored weight for display."""
    if unit_system is UnitSystem.METRIC:
        return f"{lbs_to_kg(weight_lbs):.1f} kg"
    return f"{weight_lbs:.1f} lbs"


def format_height(height_inches: float, unit_system: UnitSystem) -> str:
    """Format a stored height for display."""
    if unit_system is UnitSystem.METRIC:
        return f"{inches_to_cm(height_inches):.0f} cm"
    return f"{display_height_ft(height_inches)}' {display_height_in(height_inches)}\""


def display_weight(weight_lbs: float, unit_system: UnitSystem) -> float:
    """Return the weight value shown in form inputs."""
    if unit_system is UnitSystem.METRIC:
        return round(lbs_to_kg(weight_lbs), 1)
    return round(weight_lbs, 1)


def display_height_cm(height_inches: float) -> int:
    return round_half_up(inches_to_cm(height_inches))


def display_height_ft(height_inches: float) -> int:
    return math.floor(height_inches / INCHES_IN_FOOT)


def display_height_in(height_inches: float) -> int:
    return round_half_up(height_inches % INCHES_IN_FOOT)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)
