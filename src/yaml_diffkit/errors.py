from __future__ import annotations

from typing import Any, Optional


class DiffKitError(Exception):
    """Base class for all yaml-diffkit errors."""


class ReportRenderError(DiffKitError):
    """Raised when a report cannot be rendered."""


class UnsupportedDetailKindError(ReportRenderError):
    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"unsupported detail type {kind}")


class NodeSerializationError(ReportRenderError):
    pass


class PathSyntaxError(DiffKitError, ValueError):
    """
    Raised for path strings that cannot be parsed or do not use the
    required syntax. When raised from a filter call, ``report`` holds the
    original, unfiltered report.
    """

    def __init__(self, message: str, path: Optional[str] = None, report: Any = None):
        super().__init__(message)
        self.path = path
        self.report = report


class InvalidPatternError(DiffKitError, ValueError):
    def __init__(self, pattern: str, reason: str):
        super().__init__(f"invalid regular expression {pattern!r}: {reason}")
        self.pattern = pattern


class ManifestError(DiffKitError, ValueError):
    pass
