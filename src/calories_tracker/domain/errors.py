"""Error taxonomy for the analysis pipeline and accounts."""


class AnalysisError(Exception):
    """Base class for failures turned into an error outcome."""

    message = "Analysis failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class TransportError(AnalysisError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, status: int, status_text: str) -> None:
        self.status = status
        self.status_text = status_text
        super().__init__(f"API Error: {status} {status_text}".rstrip())


class EmptyContentError(AnalysisError):
    """The provider response carried no usable message text."""

    message = "No content in API response"


class DecodeError(AnalysisError):
    """The message text could not be resolved to a valid analysis payload."""

    message = "Could not parse the analysis result"

    def __init__(self, content: str, reason: str) -> None:
        self.content = content
        self.reason = reason
        super().__init__()


class ProviderUnavailableError(RuntimeError):
    """The provider could not be reached or did not answer in time."""


class AuthError(Exception):
    """Base class for account errors."""


class InvalidCredentialsError(AuthError):
    """No user matches the given email and password."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class DuplicateEmailError(AuthError):
    """A user with the given email already exists."""

    def __init__(self) -> None:
        super().__init__("User with this email already exists")
