"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from calories_tracker.config import Settings
from calories_tracker.containers import AppContainer
from calories_tracker.domain.models import User
from calories_tracker.domain.provider import ProviderRequest, RawProviderResponse
from calories_tracker.services.analysis import AnalysisService, ProviderClient
from calories_tracker.services.users import AuthService, UserRepository

APPLE_JSON = (
    '{"foodItems":[{"name":"apple","calories":95}],'
    '"totalCalories":95,"nutritionalSummary":"healthy"}'
)


def chat_body(content: object) -> dict[str, object]:
    """Return a chat-completion body whose first choice carries content."""
    return {
        "id": "gen-1",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}}
        ],
    }


def ok_response(content: object) -> RawProviderResponse:
    return RawProviderResponse(status=200, status_text="OK", body=chat_body(content))


@dataclass
class FakeProviderClient(ProviderClient):
    """Fake provider client returning a fixed response and recording requests."""

    response: RawProviderResponse = field(
        default_factory=lambda: ok_response(f"```json\n{APPLE_JSON}\n```")
    )
    error: Exception | None = None
    requests: list[ProviderRequest] = field(default_factory=list)

    async def complete(self, request: ProviderRequest) -> RawProviderResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, tuple[User, str]] = field(default_factory=dict)
    current: User | None = None

    def find_by_credentials(self, email: str, password: str) -> User | None:
        entry = self.users.get(email.lower())
        if entry is None or entry[1] != password:
            return None
        return entry[0]

    def find_by_email(self, email: str) -> User | None:
        entry = self.users.get(email.lower())
        return entry[0] if entry else None

    def create_user(self, name: str, email: str, password: str) -> User:
        user = User(id=str(uuid4()), name=name, email=email)
        self.users[email.lower()] = (user, password)
        return user

    def count_users(self) -> int:
        return len(self.users)

    def set_current_user(self, user: User | None) -> None:
        self.current = user

    def get_current_user(self) -> User | None:
        return self.current


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        openrouter_api_key="openrouter-key",
        user_store_path=str(tmp_path / "users.json"),
    )


@pytest.fixture
def provider_client() -> FakeProviderClient:
    return FakeProviderClient()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def container(
    settings: Settings,
    provider_client: FakeProviderClient,
    user_repository: InMemoryUserRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=AnalysisService(
            client=provider_client, model=settings.openrouter_model
        ),
        auth_service=AuthService(user_repository),
        close_resources=close_resources,
    )

