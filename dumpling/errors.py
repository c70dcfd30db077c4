# =============================================================================
# dumpling/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure a tool call can hit has its own exception type here.  The
# MCP layer (dumpling_mcp/) catches DumplingError at the dispatcher boundary
# and turns it into a tool error the host can read; nothing below ever
# crashes the process.
#
#   DumplingError
#     ├── ConfigError         bad or missing configuration
#     │     └── AuthError     DUMPLING_API_KEY unset/empty
#     ├── ValidationError     argument failed its schema (field + reason)
#     ├── UnknownToolError    no tool registered under that name
#     ├── PreconditionError   cross-field rule ("url or base64")
#     ├── UpstreamError       non-2xx / non-JSON response
#     └── NetworkError        DNS, refused, timeout, ...
# =============================================================================


class DumplingError(Exception):
    """Base class for every error raised by the Dumpling adapter."""


class ConfigError(DumplingError):
    """Configuration is missing or malformed."""


class AuthError(ConfigError):
    """The upstream credential is not available."""

    def __init__(self, env_var: str = "DUMPLING_API_KEY"):
        self.env_var = env_var
        super().__init__(f"{env_var} environment variable not set")


class ValidationError(DumplingError, ValueError):
    """An argument does not match the tool's input schema.

    Also a ValueError so pydantic validators can raise it directly and
    report it against the offending field.
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid value for '{field}': {reason}")


class UnknownToolError(DumplingError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class PreconditionError(DumplingError):
    """A tool-specific requirement across fields was not met."""


class UpstreamError(DumplingError):
    """The Dumpling API answered, but not with a usable success response."""

    def __init__(self, action: str, status_code: int, body_text: str):
        self.action = action
        self.status_code = status_code
        self.body_text = body_text
        super().__init__(f"Failed to {action}: {status_code} {body_text}")


class NetworkError(DumplingError):
    """The request never got an HTTP response."""

    def __init__(self, action: str, cause: Exception):
        self.action = action
        self.cause = cause
        super().__init__(f"Failed to {action}: {type(cause).__name__}: {cause}")
