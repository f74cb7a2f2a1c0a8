"""Tests for display labels."""

from goutcare.domain.budget import BudgetStatus
from goutcare.domain.labels import (
    RISK_LEVEL_LABELS,
    budget_status_label,
    purine_level_label,
    risk_level_label,
)
from goutcare.domain.meals import PurineLevel, RiskLevel


def test_caution_displays_as_moderate() -> None:
    assert risk_level_label(RiskLevel.CAUTION) == "Moderate"
    assert risk_level_label(RiskLevel.CAUTION, "ko") == "주의"


def test_every_language_labels_every_level() -> None:
    for labels in RISK_LEVEL_LABELS.values():
        assert set(labels) == set(RiskLevel)


def test_unknown_language_falls_back_to_english() -> None:
    assert purine_level_label(PurineLevel.VERY_HIGH, "fr") == "Very High"
    assert budget_status_label(BudgetStatus.OVER, "fr") == "Over goal"
