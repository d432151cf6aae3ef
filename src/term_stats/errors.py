"""Error types raised by the scoring engine and its registries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Base error for caller-facing configuration problems."""


class UnknownAlgorithmError(ConfigurationError):
    """Raised when a weighting function name is not registered for a family."""

    def __init__(self, family: str, name: str) -> None:
        self.family = family
        self.name = name
        super().__init__(f"The specified algorithm '{name}' to calculate {family} does not exist.")


class MissingCollectionError(ConfigurationError):
    """Raised when a term query has no owning document or collection."""

    def __init__(self, message: str = "Tf*Idf requires a collection with documents.") -> None:
        super().__init__(message)


class InvalidOptionsError(ConfigurationError):
    """Raised when scoring options fail validation."""


class UnknownWorkerError(ConfigurationError):
    """Raised when no worker is registered under a category/method pair."""

    def __init__(self, category: str, method: str) -> None:
        self.category = category
        self.method = method
        super().__init__(f"No '{method}' worker registered in category '{category}'.")


class StatisticsTimeoutError(RuntimeError):
    """Raised when collection enumeration exceeds the configured deadline."""
