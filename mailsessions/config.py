"""mailsessions configuration."""
import os

DURATION_ORDERS = ("elapsed", "legacy")
TIMESTAMP_ERROR_POLICIES = ("abort", "incomplete")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    value = (os.getenv(name) or "").strip().lower()
    if value in choices:
        return value
    return default


# Input
LOG_PATH = os.getenv("MAILSESSIONS_LOG_PATH", "")

# Session assembly
DURATION_ORDER = _env_choice("MAILSESSIONS_DURATION_ORDER", DURATION_ORDERS, "elapsed")
ON_TIMESTAMP_ERROR = _env_choice("MAILSESSIONS_ON_TIMESTAMP_ERROR", TIMESTAMP_ERROR_POLICIES, "abort")

# Logging
LOG_LEVEL = os.getenv("MAILSESSIONS_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"

# Observability
OTEL_ENABLED = _env_bool("MAILSESSIONS_OTEL_ENABLED", False)
OTEL_ENDPOINT = os.getenv("MAILSESSIONS_OTEL_ENDPOINT", "http://localhost:4318")
OTEL_SERVICE_NAME = os.getenv("MAILSESSIONS_OTEL_SERVICE_NAME", "mailsessions")

# Server settings
HOST = os.getenv("MAILSESSIONS_HOST", "0.0.0.0")
PORT = _env_int("MAILSESSIONS_PORT", 8000)
