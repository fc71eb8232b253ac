"""Error taxonomy for the research tools."""

from typing import Any

RETRYABLE_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


class ResearchToolError(Exception):
    """
    Base class for failures a research tool surfaces to its caller.

    Carries enough structure for a policy to react without parsing the
    message text.
    """

    code = "tool_error"

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        reason: str | None = None,
        retryable: bool = False,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.retryable = retryable
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "message": self.message, "retryable": self.retryable}
        if self.url is not None:
            data["url"] = self.url
        if self.status_code is not None:
            data["status_code"] = self.status_code
        if self.reason is not None:
            data["reason"] = self.reason
        if self.details:
            data["details"] = self.details
        return data


class NetworkError(ResearchToolError):
    """Upstream unreachable, timed out, or answered with a non-success status."""

    code = "network_error"

    @classmethod
    def for_status(cls, url: str, status_code: int) -> "NetworkError":
        return cls(
            f"GET {url} returned HTTP {status_code}",
            url=url,
            status_code=status_code,
            reason="http_status",
            retryable=status_code in RETRYABLE_STATUS_CODES,
        )


class ParseError(ResearchToolError):
    """Response body cannot be processed as markup at all."""

    code = "parse_error"


class InvalidToolArguments(ResearchToolError):
    """Tool arguments failed schema validation."""

    code = "invalid_arguments"


class UnknownToolError(ResearchToolError):
    """No tool is registered under the requested name."""

    code = "unknown_tool"
