"""Report output exceptions."""

from .base import SitrepError


class ReportEncodingError(SitrepError):
    """Raised when a report cannot be rendered in the requested format."""

    def __init__(self, format_name: str, reason: str):
        super().__init__(
            f"Cannot encode report as {format_name}",
            details={"format": format_name, "reason": reason},
        )
        self.format_name = format_name
        self.reason = reason
