# Config
"""
Configuration for the gethash decoder.

Values come from the environment (a local .env file is honoured) and can be
overridden per instance with keyword arguments.
"""

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from gethash.models import LineFailurePolicy, ShortGroupPolicy
from gethash.utils.errors import ConfigurationError, InvalidPolicyError

load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def parse_policy(enum_cls, name: str, value: Any):
    """Resolve a policy enum member from a member or a case-insensitive name."""
    if isinstance(value, enum_cls):
        return value
    normalized = str(value).strip().lower().replace("-", "_")
    try:
        return enum_cls(normalized)
    except ValueError:
        raise InvalidPolicyError(
            name, str(value), [member.value for member in enum_cls]
        ) from None


class Settings:
    # Logging
    log_level = "INFO"
    dev_mode = False
    log_file_path: Optional[Path] = None

    # Decoding
    short_group_policy = ShortGroupPolicy.TRUNCATE
    line_failure_policy = LineFailurePolicy.PASSTHROUGH
    failure_marker = "<error:{status}>"

    # Output
    echo_output = True
    watch_interval = 0.5

    def __init__(self, **overrides: Any) -> None:
        self.log_level = os.getenv("GETHASH_LOG_LEVEL", self.log_level)
        self.dev_mode = _env_bool("GETHASH_DEV_MODE", self.dev_mode)
        log_file = os.getenv("GETHASH_LOG_FILE")
        self.log_file_path = Path(log_file) if log_file else None
        self.short_group_policy = os.getenv("GETHASH_SHORT_GROUP_POLICY", self.short_group_policy)
        self.line_failure_policy = os.getenv("GETHASH_LINE_FAILURE_POLICY", self.line_failure_policy)
        self.failure_marker = os.getenv("GETHASH_FAILURE_MARKER", self.failure_marker)
        self.echo_output = _env_bool("GETHASH_ECHO_OUTPUT", self.echo_output)
        watch_interval = os.getenv("GETHASH_WATCH_INTERVAL", self.watch_interval)
        try:
            self.watch_interval = float(watch_interval)
        except ValueError:
            raise ConfigurationError(
                "watch_interval must be a number", {"watch_interval": watch_interval}
            ) from None

        for key, value in overrides.items():
            if not hasattr(Settings, key):
                raise ConfigurationError(f"Unknown setting '{key}'", {"setting": key})
            setattr(self, key, value)

        self.log_level = str(self.log_level).upper()
        self.short_group_policy = parse_policy(
            ShortGroupPolicy, "short group policy", self.short_group_policy
        )
        self.line_failure_policy = parse_policy(
            LineFailurePolicy, "line failure policy", self.line_failure_policy
        )
        if self.watch_interval <= 0:
            raise ConfigurationError(
                "watch_interval must be positive", {"watch_interval": self.watch_interval}
            )

    def get_log_file_path(self) -> Optional[Path]:
        if self.log_file_path is None:
            return None
        path = Path(self.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path


# Singleton instance
_settings = None

def get_settings():
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
