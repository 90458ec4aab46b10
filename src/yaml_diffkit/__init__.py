from .api import (
    load_report,
    filter_report,
    render_report,
    write_report,
)
from .model.report import Detail, Diff, InputFile, Kind, Report

__all__ = [
    "__version__",
    "load_report",
    "filter_report",
    "render_report",
    "write_report",
    "Detail",
    "Diff",
    "InputFile",
    "Kind",
    "Report",
]

__version__ = "0.1.0"
