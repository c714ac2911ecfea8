"""Span exporters that write translated Cloud Trace records locally."""

from .console_exporter import CloudTraceConsoleSpanExporter
from .file_exporter import CloudTraceFileSpanExporter

__all__ = [
    "CloudTraceConsoleSpanExporter",
    "CloudTraceFileSpanExporter",
]
