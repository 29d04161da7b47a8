"""JSON formatter for Sitrep."""

from ..exceptions import ReportEncodingError
from ..report import Report
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as pretty-printed JSON."""

    name = "json"

    def format(self, report: Report) -> str:
        try:
            return report.to_json(indent=2)
        except (TypeError, ValueError) as e:
            raise ReportEncodingError(self.name, str(e))
