"""
Cloud Trace translator - OpenTelemetry spans to Google Cloud Trace v2 records.

This package converts finished OpenTelemetry SDK spans, events, links, statuses and
resources into the Cloud Trace span schema. Transport is left to the caller.
"""

__version__ = "0.1.0"
