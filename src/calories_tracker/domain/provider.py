"""Wire-level models exchanged with the inference provider."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChatMessage:
    """One chat-completion message."""

    role: str
    content: str | list[dict[str, object]]

    def to_payload(self) -> dict[str, object]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ProviderRequest:
    """Chat-completion request body sent to the provider."""

    model: str
    messages: list[ChatMessage] = field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body for the chat-completion endpoint."""
        return {
            "model": self.model,
            "messages": [message.to_payload() for message in self.messages],
        }


@dataclass(frozen=True)
class RawProviderResponse:
    """Untrusted HTTP response as returned by the provider client."""

    status: int
    status_text: str
    body: object | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
