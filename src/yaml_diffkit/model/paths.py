from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..errors import PathSyntaxError

_INDEX = re.compile(r"^\d+$")
_BRACKETS = re.compile(r"\[([^\[\]]*)\]")


@dataclass(frozen=True)
class PathElement:
    """
    One step into a document:
    - mapping key: ``name`` only
    - list index: ``idx`` only
    - named list entry: ``key`` and ``name`` (``name=nginx``)
    """

    name: str = ""
    idx: Optional[int] = None
    key: str = ""

    def is_index(self) -> bool:
        return self.idx is not None

    def is_named_entry(self) -> bool:
        return bool(self.key) and bool(self.name)

    def __str__(self) -> str:
        if self.is_named_entry():
            return f"{self.key}={self.name}"
        if self.is_index():
            return str(self.idx)
        return self.name


@dataclass(frozen=True)
class Path:
    elements: Tuple[PathElement, ...] = ()
    document_index: int = 0

    def to_go_patch_style(self) -> str:
        if not self.elements:
            return "/"
        return "".join(f"/{element}" for element in self.elements)

    def to_dot_style(self) -> str:
        parts: List[str] = []
        for element in self.elements:
            if element.is_index():
                if parts:
                    parts[-1] += f"[{element.idx}]"
                else:
                    parts.append(f"[{element.idx}]")
            else:
                parts.append(str(element))
        return ".".join(parts)

    def root_description(self) -> str:
        return f"document #{self.document_index + 1}"

    def __str__(self) -> str:
        return self.to_go_patch_style()


def is_go_patch_path(text: str) -> bool:
    return text.startswith("/")


def _parse_segment(segment: str, original: str) -> PathElement:
    if not segment:
        raise PathSyntaxError(f"empty path element in {original!r}", path=original)
    if _INDEX.match(segment):
        return PathElement(idx=int(segment))
    if "=" in segment:
        key, _, name = segment.partition("=")
        if not key or not name:
            raise PathSyntaxError(f"malformed named entry {segment!r} in {original!r}", path=original)
        return PathElement(key=key, name=name)
    return PathElement(name=segment)


def _parse_dot_segment(segment: str, original: str) -> List[PathElement]:
    # "list[0][1]" -> name "list", indices 0 and 1
    head, bracket, rest = segment.partition("[")
    if "]" in head or (bracket and not rest):
        raise PathSyntaxError(f"unbalanced brackets in {original!r}", path=original)
    elements = []
    if head:
        elements.append(_parse_segment(head, original))
    if not rest:
        return elements
    tail = "[" + rest
    position = 0
    for match in _BRACKETS.finditer(tail):
        if match.start() != position:
            break
        content = match.group(1)
        if not _INDEX.match(content):
            raise PathSyntaxError(f"list index {content!r} is not a number in {original!r}", path=original)
        elements.append(PathElement(idx=int(content)))
        position = match.end()
    if position != len(tail):
        raise PathSyntaxError(f"unbalanced brackets in {original!r}", path=original)
    return elements


def parse_path(text: str, document_index: int = 0) -> Path:
    """
    Parse a go-patch style (``/a/0/name=x``) or dot style (``a[0].b``) path.
    """
    if text is None or not text.strip():
        raise PathSyntaxError("empty path", path=text)
    text = text.strip()

    if is_go_patch_path(text):
        if text == "/":
            return Path((), document_index)
        segments = text[1:].split("/")
        if segments[-1] == "":
            segments.pop()
        elements = tuple(_parse_segment(s, text) for s in segments)
        return Path(elements, document_index)

    elements: List[PathElement] = []
    for segment in text.split("."):
        if not segment:
            raise PathSyntaxError(f"empty path element in {text!r}", path=text)
        elements.extend(_parse_dot_segment(segment, text))
    return Path(tuple(elements), document_index)


def path_to_string(path: Optional[Path], use_go_patch_paths: bool, show_path_root: bool) -> str:
    if path is None:
        return "/" if use_go_patch_paths else "(root level)"
    result = path.to_go_patch_style() if use_go_patch_paths else path.to_dot_style()
    if show_path_root:
        result = f"({path.root_description()}) {result}"
    return result
