from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Sequence, TextIO, Union

from .diff.filters import exclude_paths, exclude_regexp, filter_paths, filter_regexp
from .emit.report import gen_report
from .emit.report import write_report as _write_report
from .model.report import Report
from .utils.io import load_manifest, parse_manifest


BytesLike = Union[bytes, bytearray, memoryview]
PathLike = Union[str, Path]
ReportLike = Union[Report, PathLike, BytesLike]


def _ensure_path(path: Optional[PathLike]) -> Optional[Path]:
    if path is None or isinstance(path, Path):
        return path
    return Path(path)


def load_report(source: ReportLike) -> Report:
    """Report from a ``Report``, a manifest path or raw manifest bytes."""
    if isinstance(source, Report):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return parse_manifest(bytes(source).decode("utf-8"))
    return load_manifest(_ensure_path(source))


def filter_report(
    source: ReportLike,
    *,
    filters: Sequence[str] = (),
    excludes: Sequence[str] = (),
    filter_regexps: Sequence[str] = (),
    exclude_regexps: Sequence[str] = (),
) -> Report:
    report = load_report(source)
    report = filter_paths(report, *filters)
    report = exclude_paths(report, *excludes)
    report = filter_regexp(report, *filter_regexps)
    return exclude_regexp(report, *exclude_regexps)


def render_report(source: ReportLike, *, use_go_patch_paths: bool = False) -> Dict[str, Any]:
    return gen_report(load_report(source), use_go_patch_paths=use_go_patch_paths).to_dict()


def write_report(
    source: ReportLike,
    output: Union[PathLike, TextIO],
    *,
    use_go_patch_paths: bool = False,
) -> Optional[Path]:
    report = load_report(source)
    if hasattr(output, "write"):
        _write_report(report, output, use_go_patch_paths=use_go_patch_paths)
        return None
    # render before touching the file so a failed render leaves nothing behind
    payload = gen_report(report, use_go_patch_paths=use_go_patch_paths).to_json()
    path = _ensure_path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload, encoding="utf-8")
    return path
