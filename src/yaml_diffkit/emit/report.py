"""
JSON rendering of a diff report.

Output shape::

    {
      "summary": {"changes": 2},
      "differences": [
        {"path": "spec.replicas", "details": [{"kind": "~", "addition": "3", "removal": "1"}]}
      ]
    }

``differences`` is left out for a report without changes, ``addition`` and
``removal`` are left out when a detail kind does not populate them.
"""
from __future__ import annotations

import base64
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO, Tuple

from yaml.nodes import Node, SequenceNode

from ..errors import UnsupportedDetailKindError
from ..model.nodes import human_readable_type, scalar_value, to_compact_json
from ..model.paths import path_to_string
from ..model.report import Detail, Diff, Kind, Report
from ..utils.hexdump import hex_dump

_log = logging.getLogger(__name__)

_log_debug = _log.debug

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class JSONDiffDetail:
    kind: str
    addition: Optional[str] = None
    removal: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {"kind": self.kind}
        if self.addition:
            data["addition"] = self.addition
        if self.removal:
            data["removal"] = self.removal
        return data


@dataclass(frozen=True)
class JSONDiff:
    path: str
    details: Tuple[JSONDiffDetail, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "details": [d.to_dict() for d in self.details]}


@dataclass(frozen=True)
class JSONDiffSummary:
    changes: int

    def to_dict(self) -> Dict[str, int]:
        return {"changes": self.changes}


@dataclass(frozen=True)
class JSONReportSpec:
    summary: JSONDiffSummary
    differences: Tuple[JSONDiff, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"summary": self.summary.to_dict()}
        if self.differences:
            data["differences"] = [d.to_dict() for d in self.differences]
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


def _decode_binary(node: Node) -> bytes:
    # YAML block scalars wrap base64 payloads over several lines
    payload = _WHITESPACE.sub("", scalar_value(node))
    return base64.b64decode(payload, validate=True)


def _sequence_as_json_array(node: SequenceNode) -> str:
    if not isinstance(node, SequenceNode):
        # anything without entries renders as an empty list
        return "[]"
    entries = []
    for entry in node.value:
        text = scalar_value(entry)
        entries.append(text if text else to_compact_json(entry))
    return json.dumps(entries, ensure_ascii=False, separators=(",", ":"))


class JSONReport:
    """Renders a ``Report`` as a JSON document."""

    def __init__(self, report: Report, *, use_go_patch_paths: bool = False):
        self.report = report
        self.use_go_patch_paths = use_go_patch_paths

    def write_report(self, out: TextIO) -> None:
        spec = self.gen_report()
        out.write(spec.to_json())
        out.flush()

    def gen_report(self) -> JSONReportSpec:
        # only show the document index if there is more than one document
        show_path_root = len(self.report.from_file.documents) > 1

        differences = tuple(self._render_diff(diff, show_path_root) for diff in self.report.diffs)
        _log_debug("Rendered %d differences", len(differences))
        return JSONReportSpec(
            summary=JSONDiffSummary(changes=len(self.report.diffs)),
            differences=differences,
        )

    def _render_diff(self, diff: Diff, show_path_root: bool) -> JSONDiff:
        return JSONDiff(
            path=path_to_string(diff.path, self.use_go_patch_paths, show_path_root),
            details=tuple(self._render_detail(detail) for detail in diff.details),
        )

    def _render_detail(self, detail: Detail) -> JSONDiffDetail:
        kind = detail.kind
        if kind is Kind.ADDITION:
            return JSONDiffDetail(kind=kind.value, addition=to_compact_json(detail.to_node))
        if kind is Kind.REMOVAL:
            return JSONDiffDetail(kind=kind.value, removal=to_compact_json(detail.from_node))
        if kind is Kind.MODIFICATION:
            return self._render_modification(detail)
        if kind is Kind.ORDERCHANGE:
            return self._render_order_change(detail)
        raise UnsupportedDetailKindError(kind)

    def _render_modification(self, detail: Detail) -> JSONDiffDetail:
        from_type = human_readable_type(detail.from_node)
        to_type = human_readable_type(detail.to_node)

        if from_type == "string" and to_type == "string":
            addition, removal = detail.to_node.value, detail.from_node.value
        elif from_type == "binary" and to_type == "binary":
            removal = hex_dump(_decode_binary(detail.from_node))
            addition = hex_dump(_decode_binary(detail.to_node))
        else:
            removal = to_compact_json(detail.from_node)
            addition = to_compact_json(detail.to_node)

        return JSONDiffDetail(kind=Kind.MODIFICATION.value, addition=addition, removal=removal)

    def _render_order_change(self, detail: Detail) -> JSONDiffDetail:
        if not isinstance(detail.from_node, SequenceNode):
            _log_debug("Order change on %s node has no list rendering", human_readable_type(detail.from_node))
            return JSONDiffDetail(kind=Kind.ORDERCHANGE.value)

        removal = _sequence_as_json_array(detail.from_node)
        addition = _sequence_as_json_array(detail.to_node)
        return JSONDiffDetail(kind=Kind.ORDERCHANGE.value, addition=addition, removal=removal)


def gen_report(report: Report, *, use_go_patch_paths: bool = False) -> JSONReportSpec:
    return JSONReport(report, use_go_patch_paths=use_go_patch_paths).gen_report()


def write_report(report: Report, out: TextIO, *, use_go_patch_paths: bool = False) -> None:
    JSONReport(report, use_go_patch_paths=use_go_patch_paths).write_report(out)


__all__: List[str] = [
    "JSONDiff",
    "JSONDiffDetail",
    "JSONDiffSummary",
    "JSONReport",
    "JSONReportSpec",
    "gen_report",
    "write_report",
]
