"""Models for food image analysis results."""

import math
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

_NUMBER_PATTERN = re.compile(r"-?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?")


def coerce_calories(value: object) -> float:
    """Return a non-negative calorie count, or 0 when the value is unusable."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER_PATTERN.search(value)
        if match is None:
            return 0.0
        number = float(match.group().replace(",", ""))
    else:
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


class FoodItem(BaseModel):
    """Single food item identified in a meal photo."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    name: str = "Unknown item"
    calories: float = Field(default=0.0, ge=0.0)
    quantity: str | None = None
    unit: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_placeholder(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "Unknown item"
        if isinstance(value, int | float):
            return str(value)
        return value

    @field_validator("calories", mode="before")
    @classmethod
    def _calories_as_number(cls, value: object) -> float:
        return coerce_calories(value)

    @field_validator("quantity", "unit", mode="before")
    @classmethod
    def _text_or_none(cls, value: object) -> object:
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, int | float):
            return f"{value:g}"
        return value


class AnalysisOutcome(BaseModel):
    """Terminal result of one analysis call: success or error, never both."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    food_items: list[FoodItem] = Field(default_factory=list)
    total_calories: float = 0.0
    nutritional_summary: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _error_has_no_payload(self) -> "AnalysisOutcome":
        if self.error is not None and (self.food_items or self.total_calories):
            raise ValueError("An error outcome cannot carry food items or calories")
        return self

    @classmethod
    def failure(
        cls, error: str, nutritional_summary: str | None = None
    ) -> "AnalysisOutcome":
        """Build an error outcome with an optional salvaged summary."""
        return cls(
            food_items=[],
            total_calories=0.0,
            nutritional_summary=nutritional_summary,
            error=error,
        )

    @property
    def ok(self) -> bool:
        """Whether the outcome carries a result rather than an error."""
        return self.error is None
