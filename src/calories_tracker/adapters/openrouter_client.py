"""OpenRouter chat-completions client built on the OpenAI SDK."""

from dataclasses import dataclass

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from calories_tracker.domain.errors import ProviderUnavailableError
from calories_tracker.domain.provider import ProviderRequest, RawProviderResponse
from calories_tracker.services.analysis import ProviderClient


@dataclass
class OpenRouterClient(ProviderClient):
    """Provider client that reports HTTP failures instead of raising them."""

    client: AsyncOpenAI

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        *,
        api_key: str,
        base_url: str,
        referer: str,
        title: str,
        timeout_seconds: float,
        max_retries: int,
        http_client: httpx.AsyncClient | None = None,
    ) -> "OpenRouterClient":
        """Create a client for an OpenAI-compatible endpoint."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                timeout=timeout_seconds,
                max_retries=max_retries,
                default_headers={"HTTP-Referer": referer, "X-Title": title},
                http_client=http_client,
            )
        )

    async def complete(self, request: ProviderRequest) -> RawProviderResponse:
        """POST the request to /chat/completions and return the raw response."""
        try:
            response = await self.client.chat.completions.with_raw_response.create(
                **request.to_payload()
            )
        except APIStatusError as exc:
            return _to_raw_response(exc.response)
        except APIConnectionError as exc:
            raise ProviderUnavailableError(str(exc)) from exc
        return _to_raw_response(response.http_response)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _to_raw_response(response: httpx.Response) -> RawProviderResponse:
    try:
        body = response.json()
    except ValueError:
        body = None
    return RawProviderResponse(
        status=response.status_code,
        status_text=response.reason_phrase,
        body=body,
    )
