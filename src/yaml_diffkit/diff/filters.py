"""
Narrow a report down to the differences at selected paths.

Every operation builds a new ``Report`` from the diffs of the input whose
path satisfies a predicate; the input report is never modified. A diff
without a path never matches, so it is dropped by the inclusion filters and
kept by the exclusion filters.
"""
from __future__ import annotations

import dataclasses
import logging
import re
from typing import Callable, List, Optional

from ..errors import InvalidPatternError, PathSyntaxError
from ..model.paths import Path, is_go_patch_path, parse_path
from ..model.report import Report

_log = logging.getLogger(__name__)

_log_debug = _log.debug

PathPredicate = Callable[[Optional[Path]], bool]


def select_diffs(report: Report, predicate: PathPredicate) -> Report:
    diffs = tuple(diff for diff in report.diffs if predicate(diff.path))
    _log_debug("Selected %d of %d differences", len(diffs), len(report.diffs))
    return dataclasses.replace(report, diffs=diffs)


def _compile_patterns(patterns) -> List[re.Pattern]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise InvalidPatternError(pattern, str(exc)) from exc
    return compiled


def filter_paths(report: Report, *paths: str) -> Report:
    """Keep differences whose path equals one of ``paths``."""
    if not paths:
        return report

    wanted = set()
    for text in paths:
        try:
            wanted.add(str(parse_path(text)))
        except PathSyntaxError as exc:
            _log_debug("Ignoring filter path %r: %s", text, exc)

    return select_diffs(report, lambda path: path is not None and str(path) in wanted)


def exclude_paths(report: Report, *paths: str) -> Report:
    """
    Drop differences whose path starts with one of ``paths``.

    Each path must use the go-patch syntax (``/spec/replicas``). On invalid
    input ``PathSyntaxError`` is raised with the unfiltered report attached
    as ``report``.
    """
    if not paths:
        return report

    prefixes = []
    for text in paths:
        if not is_go_patch_path(text):
            raise PathSyntaxError(
                f"exclude path should be a Go Patch path, but got {text}",
                path=text,
                report=report,
            )
        try:
            prefixes.append(str(parse_path(text)))
        except PathSyntaxError as exc:
            exc.report = report
            raise

    def _keep(path: Optional[Path]) -> bool:
        if path is None:
            return True
        rendered = str(path)
        return not any(rendered.startswith(prefix) for prefix in prefixes)

    return select_diffs(report, _keep)


def filter_regexp(report: Report, *patterns: str) -> Report:
    """Keep differences whose path matches any of the regular expressions."""
    if not patterns:
        return report

    regexps = _compile_patterns(patterns)
    return select_diffs(
        report,
        lambda path: path is not None and any(r.search(str(path)) for r in regexps),
    )


def exclude_regexp(report: Report, *patterns: str) -> Report:
    """Drop differences whose path matches any of the regular expressions."""
    if not patterns:
        return report

    regexps = _compile_patterns(patterns)
    return select_diffs(
        report,
        lambda path: path is None or not any(r.search(str(path)) for r in regexps),
    )


__all__ = [
    "select_diffs",
    "filter_paths",
    "exclude_paths",
    "filter_regexp",
    "exclude_regexp",
]
