"""Runtime settings read from the environment.

Values are resolved once at import time. Tests override them by
monkeypatching the module attributes; code that needs a setting reads it
through ``settings.<NAME>`` at call time so overrides are honored.
"""

import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Request bodies on /api/ larger than this are rejected with 413
API_MAX_BYTES = int(os.getenv("API_MAX_BYTES", str(1 * 1024 * 1024)))

# Customer resolution: the external user service, or the in-process directory
USE_HTTP_ADAPTERS = _flag("USE_HTTP_ADAPTERS", "false")
CUSTOMERS_BASE_URL = os.getenv("CUSTOMERS_BASE_URL", "http://users:9003")

HTTP_TIMEOUT_SECS = float(os.getenv("HTTP_TIMEOUT_SECS", "2.0"))
HTTP_RETRY_MAX = int(os.getenv("HTTP_RETRY_MAX", "3"))
HTTP_RETRY_BACKOFF_BASE = float(os.getenv("HTTP_RETRY_BACKOFF_BASE", "0.15"))
HTTP_RETRY_MAX_SLEEP = float(os.getenv("HTTP_RETRY_MAX_SLEEP", "0.5"))
HTTP_CIRCUIT_FAIL_THRESHOLD = int(os.getenv("HTTP_CIRCUIT_FAIL_THRESHOLD", "5"))
HTTP_CIRCUIT_RESET_TIMEOUT = float(os.getenv("HTTP_CIRCUIT_RESET_TIMEOUT", "30.0"))
