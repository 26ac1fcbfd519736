"""
=============================================================================
PACKAGE CONFIGURATION
=============================================================================

Centralized defaults for message construction.

Every constructor in this package accepts explicit arguments; the values
here are only used when an argument is omitted:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    WHERE DEFAULTS COME FROM                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Constructor arguments                                          │
    │      └── Request(uri, protocol_version="2")                        │
    │                                                                      │
    │   2. configure(MessageConfig(...))                                 │
    │      └── process-wide defaults installed by the application        │
    │                                                                      │
    │   3. configure(MessageConfig.from_env())                           │
    │      └── HTTPMESSAGE_* environment variables (opt-in only)         │
    │                                                                      │
    │   4. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Nothing in the package reads the environment on its own. An application
that wants environment-driven defaults calls from_env() explicitly.

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class MessageConfig:
    """
    Defaults used when building messages and moving uploaded files.

    Example:
        configure(MessageConfig(protocol_version="1.0", log_level="DEBUG"))
        request = Request("http://example.com")   # protocol 1.0
    """

    # ─────────────────────────────────────────────────────────────────────
    # MESSAGE DEFAULTS
    # ─────────────────────────────────────────────────────────────────────

    protocol_version: str = "1.1"
    """HTTP protocol version given to messages built without one."""

    default_body: str = "memory:"
    """
    Locator opened for requests built without a body.
    "memory:" is an in-memory buffer, "temp:" an anonymous temp file,
    anything else is a filesystem path.
    """

    default_body_mode: str = "rb+"
    """Mode the default body locator is opened with."""

    # ─────────────────────────────────────────────────────────────────────
    # UPLOADS
    # ─────────────────────────────────────────────────────────────────────

    upload_chunk_size: int = 4096
    """Bytes copied per read when an uploaded stream is moved to disk."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "WARNING"
    """Level for the "httpmessage" logger (DEBUG shows stream lifecycle)."""

    @classmethod
    def from_env(cls) -> "MessageConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTPMESSAGE_PROTOCOL_VERSION   Protocol version (default: 1.1)
        HTTPMESSAGE_DEFAULT_BODY       Default body locator (default: memory:)
        HTTPMESSAGE_DEFAULT_BODY_MODE  Mode for that locator (default: rb+)
        HTTPMESSAGE_UPLOAD_CHUNK_SIZE  Upload copy chunk size (default: 4096)
        HTTPMESSAGE_LOG_LEVEL          Logging level (default: WARNING)

        =====================================================================
        """
        return cls(
            protocol_version=os.getenv("HTTPMESSAGE_PROTOCOL_VERSION", "1.1"),
            default_body=os.getenv("HTTPMESSAGE_DEFAULT_BODY", "memory:"),
            default_body_mode=os.getenv("HTTPMESSAGE_DEFAULT_BODY_MODE", "rb+"),
            upload_chunk_size=int(os.getenv("HTTPMESSAGE_UPLOAD_CHUNK_SIZE", "4096")),
            log_level=os.getenv("HTTPMESSAGE_LOG_LEVEL", "WARNING"),
        )

    def validate(self) -> None:
        """Validate configuration values (fail fast, at configure time)."""
        if not self.protocol_version.strip():
            raise ValueError("protocol_version must not be empty")

        if not self.default_body:
            raise ValueError("default_body must not be empty")

        if self.upload_chunk_size < 1:
            raise ValueError(f"upload_chunk_size must be >= 1, got {self.upload_chunk_size}")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {', '.join(_LOG_LEVELS)}."
            )


_current = MessageConfig()


def get_config() -> MessageConfig:
    """Return the defaults currently in effect."""
    return _current


def configure(config: MessageConfig) -> MessageConfig:
    """
    Validate and install process-wide defaults.

    Returns the previously installed configuration so callers (and tests)
    can restore it.
    """
    global _current

    config.validate()
    previous, _current = _current, config
    logger.debug(f"Installed configuration: {config}")
    return previous


def setup_logging(config: Optional[MessageConfig] = None) -> None:
    """Configure the "httpmessage" logger hierarchy from config.log_level."""
    config = config or get_config()
    level = getattr(logging, config.log_level.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("httpmessage").setLevel(level)
