"""
Application configuration.

Loads settings from environment variables and .env file, and defines the
immutable HandlerConfig passed to the exception interceptor. The
interceptor never reads global settings: the composition root converts
them once with Settings.to_handler_config().
"""

import os
from dataclasses import dataclass, field, replace

from pydantic_settings import BaseSettings, SettingsConfigDict

# Any trace frame rendering containing this comes from the interceptor itself.
INTERCEPTOR_SOURCE = os.path.join("json_exception_handler", "interfaces", "middleware.py")


@dataclass(frozen=True)
class HandlerConfig:
    """Options for the JSON exception interceptor.

    Attributes:
        show_stack_trace: Include the filtered stack trace in error documents.
        omit_sources: Substrings; trace frames containing any are dropped.
    """

    show_stack_trace: bool = False
    omit_sources: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.omit_sources, frozenset):
            object.__setattr__(self, "omit_sources", frozenset(self.omit_sources))

    def with_omitted(self, *sources: str) -> "HandlerConfig":
        """Return a copy that also omits the given sources."""
        return replace(self, omit_sources=self.omit_sources | frozenset(sources))


def default_handler_config() -> HandlerConfig:
    """Return the default profile: traces shown, interceptor frames hidden."""
    return HandlerConfig(
        show_stack_trace=True,
        omit_sources=frozenset({INTERCEPTOR_SOURCE}),
    )


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_tracebacks: Print exception tracebacks in the server log.
        show_stack_trace: Disclose filtered stack traces in error responses.
        omit_sources: Extra trace frame filters, as a JSON list in the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="JSON_ERRORS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "JSON Exception Handler"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    log_tracebacks: bool = True
    show_stack_trace: bool = False
    omit_sources: list[str] = []

    def to_handler_config(self) -> HandlerConfig:
        """Build the immutable interceptor configuration from these settings."""
        return HandlerConfig(
            show_stack_trace=self.show_stack_trace,
            omit_sources=frozenset(self.omit_sources),
        )


settings = Settings()
