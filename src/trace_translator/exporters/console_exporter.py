"""
Console exporter for debugging and development.

Prints translated Cloud Trace records to stdout for quick verification.
"""

import json
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult

from ..config import TranslatorConfig
from ..translators.spans import translate_span

logger = logging.getLogger(__name__)


class CloudTraceConsoleSpanExporter(SpanExporter):
    """Pretty-print each translated span record.

    A batch is printed only once every span in it has translated.
    """

    def __init__(
        self,
        project_id: str,
        out: TextIO = sys.stdout,
        config: TranslatorConfig | None = None,
    ):
        if not project_id:
            raise ValueError("project_id is required")
        self.project_id = project_id
        self.out = out
        self.config = config

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        try:
            records = [translate_span(span, self.project_id, self.config) for span in spans]
            for record in records:
                self.out.write(json.dumps(record.to_dict(), indent=4) + "\n")
            self.out.flush()
            return SpanExportResult.SUCCESS
        except Exception:
            logger.exception("Failed to print %d span(s)", len(spans))
            return SpanExportResult.FAILURE

    def shutdown(self) -> None:
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True
