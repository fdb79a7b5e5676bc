"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from calories_tracker.adapters.json_user_store import JsonFileUserRepository
from calories_tracker.adapters.openrouter_client import OpenRouterClient
from calories_tracker.config import Settings
from calories_tracker.services.analysis import AnalysisService
from calories_tracker.services.users import AuthService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    auth_service: AuthService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    provider_client = OpenRouterClient.create(
        api_key=resolved_settings.openrouter_api_key,
        base_url=resolved_settings.openrouter_base_url,
        referer=resolved_settings.openrouter_referer,
        title=resolved_settings.openrouter_title,
        timeout_seconds=resolved_settings.openrouter_timeout_seconds,
        max_retries=resolved_settings.openrouter_max_retries,
    )
    analysis_service = AnalysisService(
        client=provider_client,
        model=resolved_settings.openrouter_model,
    )
    auth_service = AuthService(
        JsonFileUserRepository.create(resolved_settings.user_store_path)
    )
    if resolved_settings.seed_demo_user:
        auth_service.ensure_demo_user()

    async def close_resources() -> None:
        await provider_client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        auth_service=auth_service,
        close_resources=close_resources,
    )
