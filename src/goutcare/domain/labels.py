"""Display labels for canonical enum values."""

from goutcare.domain.budget import BudgetStatus
from goutcare.domain.meals import PurineLevel, RiskLevel

DEFAULT_LANGUAGE = "en"

RISK_LEVEL_LABELS: dict[str, dict[RiskLevel, str]] = {
    "en": {
        RiskLevel.LOW: "Low",
        RiskLevel.CAUTION: "Moderate",
        RiskLevel.HIGH: "High",
    },
    "ko": {
        RiskLevel.LOW: "낮음",
        RiskLevel.CAUTION: "주의",
        RiskLevel.HIGH: "높음",
    },
}

PURINE_LEVEL_LABELS: dict[str, dict[PurineLevel, str]] = {
    "en": {
        PurineLevel.LOW: "Low",
        PurineLevel.MEDIUM: "Moderate",
        PurineLevel.HIGH: "High",
        PurineLevel.VERY_HIGH: "Very High",
    },
    "ko": {
        PurineLevel.LOW: "낮음",
        PurineLevel.MEDIUM: "보통",
        PurineLevel.HIGH: "높음",
        PurineLevel.VERY_HIGH: "매우 높음",
    },
}

BUDGET_STATUS_LABELS: dict[str, dict[BudgetStatus, str]] = {
    "en": {
        BudgetStatus.UNDER: "Within goal",
        BudgetStatus.APPROACHING: "Approaching goal",
        BudgetStatus.OVER: "Over goal",
    },
    "ko": {
        BudgetStatus.UNDER: "목표 이내",
        BudgetStatus.APPROACHING: "목표 근접",
        BudgetStatus.OVER: "목표 초과",
    },
}


def risk_level_label(level: RiskLevel, language: str = DEFAULT_LANGUAGE) -> str:
    """Return the display label for a risk level."""
    labels = RISK_LEVEL_LABELS.get(language, RISK_LEVEL_LABELS[DEFAULT_LANGUAGE])
    return labels[level]


def purine_level_label(level: PurineLevel, language: str = DEFAULT_LANGUAGE) -> str:
    """Return the display label for a food item purine level."""
    labels = PURINE_LEVEL_LABELS.get(language, PURINE_LEVEL_LABELS[DEFAULT_LANGUAGE])
    return labels[level]


def budget_status_label(status: BudgetStatus, language: str = DEFAULT_LANGUAGE) -> str:
    """Return the display label for a budget status."""
    labels = BUDGET_STATUS_LABELS.get(
        language, BUDGET_STATUS_LABELS[DEFAULT_LANGUAGE]
    )
    return labels[status]
