"""
qlerror Configuration Module

Centralized configuration for the query service and error serialization.
Loads settings from environment variables with sensible defaults.

Copyright (c) 2025 Graziano Labs Corp.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError


@dataclass
class QLErrorConfig:
    """Configuration for error serialization and the query runtime."""

    # ====================
    # Error serialization
    # ====================

    include_extensions: bool = True
    """Emit ``extensions`` next to message/locations/path in responses.

    The default serialized error shape never contains extensions; the
    response serializer adds them under their own key when enabled.
    """

    mask_internal_errors: bool = False
    """Replace messages of errors wrapping non-query exceptions.

    When enabled, an execution error whose original error is not a
    QueryError is reported as "Internal error" so resolver exception
    text does not leak to clients.
    """

    max_errors: int = 100
    """Maximum number of errors reported per response."""

    capture_trace: bool = True
    """Capture the construction call stack for errors that wrap no exception.

    A trace adopted from a wrapped error is kept regardless of this setting.
    """

    # ====================
    # Runtime Configuration
    # ====================

    dev_mode: bool = False
    """Attach the diagnostic trace to responses under extensions.exception.

    Only for local debugging: traces are internal diagnostics.
    """

    @classmethod
    def from_env(cls) -> "QLErrorConfig":
        """Load configuration from environment variables.

        Environment variables:
          QLERROR_INCLUDE_EXTENSIONS - Emit extensions (1/0)
          QLERROR_MASK_INTERNAL_ERRORS - Mask resolver exception text (1/0)
          QLERROR_MAX_ERRORS - Max errors per response
          QLERROR_CAPTURE_TRACE - Capture construction stacks (1/0)
          QLERROR_DEV_MODE - Attach traces to responses (1/0)

        Returns:
            QLErrorConfig instance with values from environment
        """
        try:
            max_errors = int(os.getenv("QLERROR_MAX_ERRORS", "100"))
        except ValueError as e:
            raise ConfigError(
                code="E001",
                message=f"QLERROR_MAX_ERRORS must be an integer, got {os.getenv('QLERROR_MAX_ERRORS')!r}",
            ) from e

        return cls(
            include_extensions=os.getenv("QLERROR_INCLUDE_EXTENSIONS", "1") == "1",
            mask_internal_errors=os.getenv("QLERROR_MASK_INTERNAL_ERRORS", "0") == "1",
            max_errors=max_errors,
            capture_trace=os.getenv("QLERROR_CAPTURE_TRACE", "1") == "1",
            dev_mode=os.getenv("QLERROR_DEV_MODE", "0") == "1",
        )

    def validate(self) -> None:
        """Validate configuration settings.

        Raises:
            ConfigError: If configuration is invalid
        """
        if self.max_errors < 1:
            raise ConfigError(
                code="E002",
                message=f"max_errors must be >= 1, got {self.max_errors}",
                hint="Set QLERROR_MAX_ERRORS to a positive integer",
            )

    def get_summary(self) -> str:
        """Get human-readable configuration summary."""
        lines = [
            "qlerror Configuration Summary",
            "=" * 50,
            "",
            "Errors:",
            f"  Extensions: {'Included' if self.include_extensions else 'Omitted'}",
            f"  Mask Internal Errors: {self.mask_internal_errors}",
            f"  Max Errors: {self.max_errors}",
            f"  Capture Trace: {self.capture_trace}",
            "",
            "Runtime:",
            f"  Dev Mode: {self.dev_mode}",
        ]
        return "\n".join(lines)


# Default configuration instance (lazy-loaded from environment)
_default_config: Optional[QLErrorConfig] = None


def get_default_config() -> QLErrorConfig:
    """Get default configuration instance (singleton pattern).

    Returns:
        Default QLErrorConfig loaded from environment
    """
    global _default_config
    if _default_config is None:
        _default_config = QLErrorConfig.from_env()
        _default_config.validate()
    return _default_config
