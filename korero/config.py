"""Configuration for the HTTP helpers, terminal output and CLI.

A single pydantic model carries every setting so that the request builder,
the terminal logger and the command line all read from the same place.
"""

from pydantic import BaseModel, Field, field_validator

from . import __version__
from .output.verbosity import Verbosity


class KoreroConfig(BaseModel):
    """Global korero configuration."""

    # HTTP settings
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds; None keeps the client default",
    )
    max_attempts: int = Field(default=1, ge=1, description="Attempts per request on transport errors")
    backoff_multiplier: float = Field(default=2.0, gt=0, description="Multiplier for exponential backoff")
    user_agent: str = Field(default=f"korero/{__version__}", description="User-Agent header value")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra headers sent with every request")

    # Logging settings
    log_level: str = Field(default="WARNING", description="Logging level for library diagnostics")
    json_logs: bool = Field(default=False, description="Use JSON log format")
    verbosity: Verbosity = Field(default=Verbosity.LOW, description="Terminal output verbosity")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and uppercase the logging level name."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v

    @property
    def session_headers(self) -> dict[str, str]:
        """Headers installed on every session created from this config."""
        return {"User-Agent": self.user_agent, **self.headers}
