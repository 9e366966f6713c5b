"""
Exception types raised across the chat application.

Every error the application raises on purpose derives from PokechatError,
so the terminal can tell expected failures (bad key, network trouble)
apart from programming errors.
"""


class PokechatError(Exception):
    """Base class for application errors."""


class MissingCredentialError(PokechatError):
    """Raised when GOOGLE_API_KEY is not configured."""


class EmbeddingError(PokechatError):
    """Raised when the embedding provider fails to return a vector."""


class ChatError(PokechatError):
    """Raised when the chat model fails to answer a turn."""


class RequestTimeoutError(PokechatError):
    """Raised when a network call exceeds the configured timeout."""


class DimensionMismatchError(PokechatError, ValueError):
    """Raised when two vectors that must be compared differ in length."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Vector dimensionality mismatch: expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class UnknownBotError(PokechatError, KeyError):
    """Raised when a bot id is not registered."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class KnowledgeBaseError(PokechatError):
    """Raised when the knowledge-base file is missing or malformed."""
