# =============================================================================
# dumpling/config.py  —  Process Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Collects every environment-driven knob into one Settings object that is
#   built once at startup (main.py) and handed to the client and the server
#   factory.  Nothing else in the code base reads os.environ.
#
# THE ONE EXCEPTION — THE API KEY:
#   The credential is NOT captured at startup.  resolve_api_key() reads it
#   from the environment on every call, so:
#     a) tool discovery works without a key (hosts list tools before the
#        user has configured anything), and
#     b) a missing key fails the individual call with a clear message
#        instead of killing the server.
#
# .env SUPPORT:
#   main.py calls python-dotenv's load_dotenv() before Settings.from_env(),
#   so a local .env file works the same as exported variables.
# =============================================================================

from dataclasses import dataclass
import os
from typing import Optional

from dumpling.errors import AuthError, ConfigError


DEFAULT_BASE_URL = "https://app.dumplingai.com"
DEFAULT_PREVIEW_LENGTH = 100
API_KEY_ENV = "DUMPLING_API_KEY"


@dataclass(frozen=True)
class Settings:
    """Read-only configuration shared by every tool call."""

    base_url: str = DEFAULT_BASE_URL
    api_key_env: str = API_KEY_ENV
    # None = no timeout, the same as the upstream's reference client.
    timeout: Optional[float] = None
    # Base64 payloads are cut to this many characters plus "..."
    preview_length: int = DEFAULT_PREVIEW_LENGTH
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build Settings from environment variables.

        Raises:
            ConfigError: if a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ

        base_url = env.get("DUMPLING_BASE_URL", "").strip() or DEFAULT_BASE_URL

        timeout = None
        raw_timeout = env.get("DUMPLING_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(
                    f"DUMPLING_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
                ) from None
            if timeout <= 0:
                raise ConfigError("DUMPLING_TIMEOUT must be greater than zero")

        preview_length = DEFAULT_PREVIEW_LENGTH
        raw_preview = env.get("DUMPLING_PREVIEW_LENGTH", "").strip()
        if raw_preview:
            try:
                preview_length = int(raw_preview)
            except ValueError:
                raise ConfigError(
                    f"DUMPLING_PREVIEW_LENGTH must be an integer, got {raw_preview!r}"
                ) from None
            if preview_length < 0:
                raise ConfigError("DUMPLING_PREVIEW_LENGTH must not be negative")

        log_level = env.get("DUMPLING_LOG_LEVEL", "INFO").strip().upper() or "INFO"

        return cls(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            preview_length=preview_length,
            log_level=log_level,
        )

    def resolve_api_key(self) -> str:
        """Return the API key from the environment, read fresh on each call.

        Raises:
            AuthError: if the variable is unset or blank.
        """
        key = os.environ.get(self.api_key_env, "").strip()
        if not key:
            raise AuthError(self.api_key_env)
        return key
