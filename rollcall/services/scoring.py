"""Point policies: how one history row contributes to a student's total.

Policies produce SQL expressions so totals are always aggregated straight
from history inside the database.
"""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import case, literal
from sqlalchemy.sql.elements import ColumnElement

from rollcall.core.config import Settings
from rollcall.models import Category, HistoryEvent


class PointPolicy(Protocol):
    def expression(self) -> ColumnElement[int]:
        """Points for the current ``HistoryEvent``/``Category`` row (0 for outer-join gaps)."""
        ...


class SatisfactoryCount:
    """One point per satisfactory event."""

    def expression(self) -> ColumnElement[int]:
        return case((HistoryEvent.satisfactory.is_(True), literal(1)), else_=literal(0))


class CategoryWeighted:
    """Satisfactory events score the weight of their category."""

    def __init__(self, weights: dict[str, int], default: int = 1) -> None:
        self.weights = dict(weights)
        self.default = default

    def expression(self) -> ColumnElement[int]:
        weight: ColumnElement[int] = literal(self.default)
        if self.weights:
            whens = [(Category.name == name, literal(value)) for name, value in sorted(self.weights.items())]
            weight = case(*whens, else_=literal(self.default))
        return case((HistoryEvent.satisfactory.is_(True), weight), else_=literal(0))


def policy_from_settings(settings: Settings) -> PointPolicy:
    if settings.scoring_policy == "count":
        return SatisfactoryCount()
    if settings.scoring_policy == "weighted":
        return CategoryWeighted(settings.category_weights)
    raise ValueError(f"Unknown scoring policy: {settings.scoring_policy}")
