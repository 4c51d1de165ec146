"""Error taxonomy for the embed service.

Every failure raised while fetching, extracting, rendering or minifying a
work is an ``EmbedError``. None of them are fatal: the request gate turns
any of them into a redirect to the origin site and logs the details.
"""

from enum import Enum
from typing import Any, Literal

Stage = Literal["fetch", "extract", "render", "minify"]


class ErrorCode(str, Enum):
    """Stable error codes, used in log lines."""

    NOT_FOUND = "NOT_FOUND"
    MALFORMED_NUMBER = "MALFORMED_NUMBER"
    MALFORMED_CHAPTERS = "MALFORMED_CHAPTERS"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"
    TEMPLATE_FAILURE = "TEMPLATE_FAILURE"
    ENCODING_FAILURE = "ENCODING_FAILURE"


class EmbedError(Exception):  # NOQA: N818
    """Base exception for every recoverable failure.

    Attributes
    ----------
    message
        Human-readable error message
    code
        Stable error code
    stage
        Pipeline stage the failure happened in
    details
        Additional context for the operator log
    """

    stage: Stage = "extract"

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ExtractionError(EmbedError):
    """Base exception for markup extraction failures."""


class FieldNotFoundError(ExtractionError):
    """Raised when a required structural query matched nothing."""

    def __init__(self, field: str, selector: str) -> None:
        super().__init__(
            message=f"Could not find {field} ({selector})",
            code=ErrorCode.NOT_FOUND,
            details={"field": field, "selector": selector},
        )
        self.field = field


class MalformedNumberError(ExtractionError):
    """Raised when a numeric field is not a plain unsigned integer."""

    def __init__(self, field: str, raw: str) -> None:
        super().__init__(
            message=f"Could not parse {field} from {raw!r}",
            code=ErrorCode.MALFORMED_NUMBER,
            details={"field": field, "raw": raw},
        )
        self.field = field


class MalformedChaptersError(ExtractionError):
    """Raised when a chapters token does not read ``N/M`` or ``N/``."""

    def __init__(self, raw: str, reason: str = "not of the form N/M") -> None:
        super().__init__(
            message=f"Could not parse chapters from {raw!r}: {reason}",
            code=ErrorCode.MALFORMED_CHAPTERS,
            details={"raw": raw},
        )


class TransportError(EmbedError):
    """Raised when the work page could not be fetched."""

    stage: Stage = "fetch"

    def __init__(
        self,
        url: str,
        cause: str,
        status_code: int | None = None,
    ) -> None:
        details: dict[str, Any] = {"url": url}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            message=f"Could not fetch {url}: {cause}",
            code=ErrorCode.TRANSPORT_FAILURE,
            details=details,
        )
        self.status_code = status_code


class TemplateRenderError(EmbedError):
    """Raised when the preview template fails to render."""

    stage: Stage = "render"

    def __init__(self, template: str, cause: str) -> None:
        super().__init__(
            message=f"Could not render {template}: {cause}",
            code=ErrorCode.TEMPLATE_FAILURE,
            details={"template": template},
        )


class MinificationError(EmbedError):
    """Raised when minified output is not usable text."""

    stage: Stage = "minify"

    def __init__(self, cause: str) -> None:
        super().__init__(
            message=f"Could not minify preview: {cause}",
            code=ErrorCode.ENCODING_FAILURE,
        )
