"""Food image analysis service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calories_tracker.domain.analysis import AnalysisOutcome
from calories_tracker.domain.errors import ProviderUnavailableError
from calories_tracker.domain.provider import ProviderRequest, RawProviderResponse
from calories_tracker.services.request_builder import (
    build_request,
    image_bytes_to_data_url,
)
from calories_tracker.services.response_decoder import decode

_logger = logging.getLogger(__name__)


class ProviderClient(Protocol):
    """Interface for the chat-completion endpoint."""

    async def complete(self, request: ProviderRequest) -> RawProviderResponse:
        """Send the request and return the raw response, whatever its status."""


@dataclass
class AnalysisService:
    """Builds the provider request, calls it and decodes the answer."""

    client: ProviderClient
    model: str

    async def analyze(self, image_base64: str) -> AnalysisOutcome:
        """Estimate calories for a base64 image or image data URL."""
        request = build_request(image_base64, self.model)
        try:
            raw = await self.client.complete(request)
        except ProviderUnavailableError as exc:
            _logger.warning("Provider unavailable: %s", exc)
            return AnalysisOutcome.failure(str(exc) or "Unknown error")
        outcome = decode(raw)
        _logger.info(
            "Food analysis: status=%s items=%s total=%s error=%s",
            raw.status,
            len(outcome.food_items),
            outcome.total_calories,
            outcome.error,
        )
        return outcome

    async def analyze_bytes(self, image_bytes: bytes) -> AnalysisOutcome:
        """Estimate calories for raw image bytes."""
        return await self.analyze(image_bytes_to_data_url(image_bytes))
