"""Decode provider responses into analysis outcomes.

The model is asked for JSON but answers in free text: sometimes a fenced
markdown block, sometimes an object wrapped in prose, sometimes nothing
usable. Decoding runs as a fixed sequence of stages and every failure is
turned into an error outcome, so callers never see an exception.
"""

import json
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from pydantic import ValidationError

from calories_tracker.domain.analysis import (
    AnalysisOutcome,
    FoodItem,
    coerce_calories,
)
from calories_tracker.domain.errors import (
    AnalysisError,
    DecodeError,
    EmptyContentError,
    TransportError,
)
from calories_tracker.domain.provider import RawProviderResponse

_logger = logging.getLogger(__name__)

_FENCED_JSON_PATTERN = re.compile(
    r"```json[ \t]*\r?\n(.*?)\r?\n[ \t]*```", re.DOTALL
)
_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(frozen=True)
class ValidPayload:
    """Parsed payload that satisfied the expected structure."""

    outcome: AnalysisOutcome


@dataclass(frozen=True)
class InvalidPayload:
    """Parsed payload rejected by structural validation."""

    reason: str


PayloadValidation = ValidPayload | InvalidPayload


def decode(raw: RawProviderResponse) -> AnalysisOutcome:
    """Turn a raw provider response into an outcome. Never raises."""
    try:
        _check_transport(raw)
        content = extract_content(raw.body)
        return _decode_content(content)
    except DecodeError as exc:
        _logger.warning("Could not decode analysis result: %s", exc.reason)
        return AnalysisOutcome.failure(str(exc), nutritional_summary=exc.content)
    except AnalysisError as exc:
        return AnalysisOutcome.failure(str(exc))


def _check_transport(raw: RawProviderResponse) -> None:
    if raw.ok:
        return
    _logger.warning("Provider API error: status=%s body=%s", raw.status, raw.body)
    raise TransportError(raw.status, raw.status_text)


def extract_content(body: object) -> str:
    """Return the assistant message text from a chat-completion body."""
    if not isinstance(body, dict):
        raise EmptyContentError
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        raise EmptyContentError
    first = choices[0]
    if not isinstance(first, dict):
        raise EmptyContentError
    message = first.get("message")
    if not isinstance(message, dict):
        raise EmptyContentError

    content = message.get("content")
    if isinstance(content, list):
        content = "".join(
            part["text"]
            for part in content
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
    if not isinstance(content, str) or not content.strip():
        raise EmptyContentError
    return content


def _decode_content(content: str) -> AnalysisOutcome:
    parsed = parse_embedded_json(content)
    if parsed is None:
        raise DecodeError(content, "no parseable JSON found")
    validation = validate_payload(parsed)
    if isinstance(validation, InvalidPayload):
        raise DecodeError(content, validation.reason)
    return validation.outcome


def json_candidates(content: str) -> Iterator[str]:
    """Yield candidate JSON strings, most reliable first.

    Order: fenced ```json block, greedy first-brace-to-last-brace span,
    then the raw text.
    """
    fenced = _FENCED_JSON_PATTERN.search(content)
    if fenced:
        yield fenced.group(1)
    braces = _OBJECT_PATTERN.search(content)
    if braces:
        yield braces.group(0)
    yield content


def parse_embedded_json(content: str) -> object | None:
    """Parse the first candidate that is valid JSON, or return None."""
    for candidate in json_candidates(content):
        try:
            return json.loads(candidate)
        except (ValueError, RecursionError):
            continue
    return None


def validate_payload(parsed: object) -> PayloadValidation:
    """Check the parsed document and build a success outcome from it."""
    if not isinstance(parsed, dict):
        return InvalidPayload("payload is not a JSON object")
    raw_items = parsed.get("foodItems")
    if not isinstance(raw_items, list):
        return InvalidPayload("foodItems is missing or not a list")

    items: list[FoodItem] = []
    for index, raw_item in enumerate(raw_items):
        if not isinstance(raw_item, dict):
            return InvalidPayload(f"food item {index} is not an object")
        try:
            items.append(FoodItem.model_validate(raw_item))
        except ValidationError as exc:
            return InvalidPayload(f"food item {index} is invalid: {exc}")

    return ValidPayload(
        AnalysisOutcome(
            food_items=items,
            total_calories=_total_calories(parsed.get("totalCalories"), items),
            nutritional_summary=_summary(parsed.get("nutritionalSummary")),
        )
    )


def _total_calories(provided: object, items: list[FoodItem]) -> float:
    """Use the provided total when positive, else sum the items."""
    total = coerce_calories(provided)
    if total > 0:
        return total
    return sum(item.calories for item in items)


def _summary(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)
