"""Centralized configuration for term-stats using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed defaults for the scoring engine loaded from environment variables.

    Every field can be overridden with a ``TERM_STATS_`` prefixed variable,
    e.g. ``TERM_STATS_PRECISION=6``. Per-call options passed to the scorer
    always win over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="TERM_STATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Scoring defaults
    default_tf: str = Field(default="natural", description="Term-frequency transform used when none is requested")
    default_idf: str = Field(
        default="logarithm", description="Inverse-document-frequency transform used when none is requested"
    )
    remove_common_words: bool = Field(default=True, description="Score common words of the term's language as 0")
    precision: int = Field(default=4, ge=0, description="Decimal digits the final score is rounded to")
    normalize_word_count: bool = Field(
        default=False, description="Divide the transformed term frequency by the document word count"
    )

    # Collection enumeration
    df_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Abort document-frequency enumeration after this many seconds (unset disables the deadline)",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    def scoring_defaults(self) -> dict[str, object]:
        """Return the option defaults in the shape accepted by the scorer."""
        return {
            "tf": self.default_tf,
            "idf": self.default_idf,
            "remove_common_words": self.remove_common_words,
            "precision": self.precision,
            "normalize_word_count": self.normalize_word_count,
        }
