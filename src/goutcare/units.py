"""Unit conversion and display formatting."""

from typing import Literal

KG_TO_LBS = 2.20462
ML_TO_OZ = 0.033814


def kg_to_lbs(kg: float) -> float:
    return kg * KG_TO_LBS


def lbs_to_kg(lbs: float) -> float:
    return lbs / KG_TO_LBS


def ml_to_oz(ml: float) -> float:
    return ml * ML_TO_OZ


def oz_to_ml(oz: float) -> float:
    return oz / ML_TO_OZ


def format_weight(kg: float, unit: Literal["kg", "lbs"]) -> str:
    """Format a weight stored in kilograms for display."""
    if unit == "lbs":
        return f"{kg_to_lbs(kg):.1f} lbs"
    return f"{kg:.1f} kg"


def format_fluid(ml: float, unit: Literal["ml", "oz"]) -> str:
    """Format a fluid amount stored in millilitres for display."""
    if unit == "oz":
        return f"{ml_to_oz(ml):.1f} oz"
    return f"{round(ml)} ml"
