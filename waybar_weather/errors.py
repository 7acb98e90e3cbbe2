"""Error taxonomy for weather fetching and template rendering."""

from enum import StrEnum


class ErrorKind(StrEnum):
    UPSTREAM_STATUS = "upstream_status"
    DECODE_FAILURE = "decode_failure"
    SHAPE_MISMATCH = "shape_mismatch"
    REQUEST_FAILURE = "request_failure"
    TEMPLATE_COMPILE = "template_compile"
    RENDER_FAILURE = "render_failure"


class WeatherError(Exception):
    """Base class for all errors raised by the fetch/render core."""

    kind: ErrorKind


class UpstreamStatusError(WeatherError):
    """Raised when the weather API answers with a non-200 status."""

    kind = ErrorKind.UPSTREAM_STATUS

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(WeatherError, ValueError):
    """Raised when a response body or a single scalar cannot be decoded.

    Also a ValueError so pydantic validators surface it as a validation error.
    """

    kind = ErrorKind.DECODE_FAILURE


class ShapeMismatchError(WeatherError):
    """Raised when parallel series arrays differ in length."""

    kind = ErrorKind.SHAPE_MISMATCH

    def __init__(self, message: str, lengths: dict[str, int] | None = None):
        super().__init__(message)
        self.lengths = lengths or {}


class RequestFailedError(WeatherError):
    """Raised on transport failures (connect errors, timeouts)."""

    kind = ErrorKind.REQUEST_FAILURE


class TemplateCompileError(WeatherError):
    """Raised when a template does not compile or fails its self-check."""

    kind = ErrorKind.TEMPLATE_COMPILE

    def __init__(self, message: str, template_name: str):
        super().__init__(message)
        self.template_name = template_name


class RenderError(WeatherError):
    """Raised when a compiled template fails against real data."""

    kind = ErrorKind.RENDER_FAILURE

    def __init__(self, message: str, template_name: str):
        super().__init__(message)
        self.template_name = template_name


class GeocodeError(Exception):
    """Raised when reverse geocoding fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
