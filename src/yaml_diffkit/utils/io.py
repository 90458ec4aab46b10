"""
Loading of YAML inputs and diff manifests.

A diff manifest is the YAML form of a ``Report`` as produced by an upstream
diff engine::

    from: left.yaml                # file next to the manifest, or inline:
    to:
      location: right.yaml
      documents:
        - {spec: {replicas: 3}}
    diffs:
      - path: /spec/replicas
        document: 0                # optional, index into the documents
        details:
          - kind: "~"              # +, -, ~, -> or addition, removal, ...
            from: 1
            to: 3

``from``/``to`` values of a detail are kept as composed nodes, so tags such
as ``!!binary`` survive.
"""
from __future__ import annotations

from pathlib import Path as FsPath
from typing import Dict, Optional, Union

import yaml
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from ..errors import ManifestError, PathSyntaxError
from ..model.nodes import NULL_TAG, compose_documents
from ..model.paths import Path, parse_path
from ..model.report import Detail, Diff, InputFile, Kind, Report

PathLike = Union[str, FsPath]


def load_input_file(path: PathLike) -> InputFile:
    with open(path, "r", encoding="utf-8") as f:
        return InputFile(location=str(path), documents=compose_documents(f.read()))


def _mapping(node: Node, what: str) -> Dict[str, Node]:
    if not isinstance(node, MappingNode):
        raise ManifestError(f"{what} must be a mapping")
    return {key.value: value for key, value in node.value if isinstance(key, ScalarNode)}


def _is_null(node: Optional[Node]) -> bool:
    return node is None or (isinstance(node, ScalarNode) and node.tag == NULL_TAG)


def _input_file(node: Optional[Node], side: str, base_dir: Optional[FsPath]) -> InputFile:
    if _is_null(node):
        return InputFile(location=side)
    if isinstance(node, ScalarNode):
        location = FsPath(node.value)
        if base_dir is not None and not location.is_absolute():
            location = base_dir / location
        return load_input_file(location)

    fields = _mapping(node, f"'{side}'")
    location = fields.get("location")
    documents = fields.get("documents")
    if documents is not None and not isinstance(documents, SequenceNode):
        raise ManifestError(f"'{side}.documents' must be a list")
    return InputFile(
        location=location.value if isinstance(location, ScalarNode) else side,
        documents=tuple(documents.value) if documents is not None else (),
    )


def _diff_path(fields: Dict[str, Node], position: int) -> Optional[Path]:
    path_node = fields.get("path")
    if _is_null(path_node):
        return None
    document = fields.get("document")
    try:
        document_index = int(document.value) if document is not None else 0
    except (TypeError, ValueError) as exc:
        raise ManifestError(f"diff #{position}: document index {document.value!r} is not a number") from exc
    try:
        return parse_path(path_node.value, document_index=document_index)
    except PathSyntaxError as exc:
        raise ManifestError(f"diff #{position}: {exc}") from exc


def _detail(node: Node, position: int) -> Detail:
    fields = _mapping(node, f"diff #{position} detail")
    kind = fields.get("kind")
    if not isinstance(kind, ScalarNode):
        raise ManifestError(f"diff #{position}: detail without kind")
    return Detail(kind=Kind.parse(kind.value), from_node=fields.get("from"), to_node=fields.get("to"))


def _diff(node: Node, position: int) -> Diff:
    fields = _mapping(node, f"diff #{position}")
    details = fields.get("details")
    if not isinstance(details, SequenceNode) or not details.value:
        raise ManifestError(f"diff #{position}: 'details' must be a non-empty list")
    return Diff(
        path=_diff_path(fields, position),
        details=tuple(_detail(d, position) for d in details.value),
    )


def parse_manifest(text: str, base_dir: Optional[PathLike] = None) -> Report:
    root = yaml.compose(text, Loader=yaml.SafeLoader)
    if root is None:
        raise ManifestError("empty manifest")
    fields = _mapping(root, "manifest")
    base = FsPath(base_dir) if base_dir is not None else None

    diffs_node = fields.get("diffs")
    if _is_null(diffs_node):
        diffs = ()
    elif isinstance(diffs_node, SequenceNode):
        diffs = tuple(_diff(d, i) for i, d in enumerate(diffs_node.value))
    else:
        raise ManifestError("'diffs' must be a list")

    return Report(
        from_file=_input_file(fields.get("from"), "from", base),
        to_file=_input_file(fields.get("to"), "to", base),
        diffs=diffs,
    )


def load_manifest(path: PathLike) -> Report:
    path = FsPath(path)
    return parse_manifest(path.read_text(encoding="utf-8"), base_dir=path.parent)
