"""
File-based exporter for offline inspection of translated spans.

Writes one Cloud Trace v2 span record (REST JSON form) per line for:
- Offline validation
- Test fixtures
- Comparing translation output across releases
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult

from ..config import TranslatorConfig
from ..translators.spans import translate_span
from ..validators.record_validator import RecordValidator

logger = logging.getLogger(__name__)


class CloudTraceFileSpanExporter(SpanExporter):
    """Export translated spans to a JSON Lines file.

    Export is all or nothing per batch. If any span fails to translate (an unended
    span, or an attribute outside str, bool, int and float such as the sequence
    value ['a', 'b']) the error is logged, nothing from the batch is written
    and export returns FAILURE.
    """

    def __init__(
        self,
        output_path: str | Path,
        project_id: str,
        append: bool = True,
        config: TranslatorConfig | None = None,
        validate: bool = True,
    ):
        """Initialize file exporter."""
        if not project_id:
            raise ValueError("project_id is required")
        self.output_path = Path(output_path)
        self.project_id = project_id
        self.append = append
        self.config = config
        self.validator = RecordValidator() if validate else None
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        if not append and self.output_path.exists():
            self.output_path.unlink()

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        """Translate every span, then append the whole batch to the file."""
        try:
            records = [translate_span(span, self.project_id, self.config) for span in spans]
            if self.validator is not None:
                for record in records:
                    result = self.validator.validate(record)
                    if not result.valid:
                        logger.warning(
                            "Span %s exceeds Cloud Trace limits:\n%s", record.span_id, result
                        )

            with open(self.output_path, "a", encoding="utf-8") as f:
                for record in records:
                    f.write(json.dumps(record.to_dict()) + "\n")

            return SpanExportResult.SUCCESS
        except Exception:
            logger.exception("Failed to export %d span(s) to %s", len(spans), self.output_path)
            return SpanExportResult.FAILURE

    def shutdown(self) -> None:
        """Shutdown exporter."""
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Force flush."""
        return True
