"""Tests for unit conversion helpers."""

import pytest

from goutcare.units import (
    format_fluid,
    format_weight,
    kg_to_lbs,
    lbs_to_kg,
    ml_to_oz,
    oz_to_ml,
)


def test_weight_conversion() -> None:
    assert kg_to_lbs(10) == pytest.approx(22.0462)
    assert lbs_to_kg(kg_to_lbs(72.5)) == pytest.approx(72.5)


def test_fluid_conversion() -> None:
    assert ml_to_oz(1000) == pytest.approx(33.814)
    assert oz_to_ml(ml_to_oz(250)) == pytest.approx(250)


def test_format_weight() -> None:
    assert format_weight(70, "kg") == "70.0 kg"
    assert format_weight(70, "lbs") == "154.3 lbs"


def test_format_fluid() -> None:
    assert format_fluid(2500, "ml") == "2500 ml"
    assert format_fluid(2500, "oz") == "84.5 oz"
