from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from yaml.nodes import Node

from .paths import Path


class Kind(Enum):
    ADDITION = "+"
    REMOVAL = "-"
    MODIFICATION = "~"
    ORDERCHANGE = "->"

    @classmethod
    def parse(cls, value) -> Union["Kind", str]:
        """
        Map a tag (``+``) or lower-case name (``addition``) to a ``Kind``.
        Unknown values are returned unchanged so renderers can report them.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for kind in cls:
            if text == kind.value or text.lower() == kind.name.lower():
                return kind
        return text


@dataclass(frozen=True)
class Detail:
    kind: Union[Kind, str]
    from_node: Optional[Node] = None
    to_node: Optional[Node] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", Kind.parse(self.kind))


@dataclass(frozen=True)
class Diff:
    path: Optional[Path]
    details: Tuple[Detail, ...]


@dataclass(frozen=True)
class InputFile:
    location: str
    documents: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class Report:
    from_file: InputFile
    to_file: InputFile
    diffs: Tuple[Diff, ...] = ()

    def filter(self, *paths: str) -> "Report":
        from ..diff.filters import filter_paths

        return filter_paths(self, *paths)

    def exclude(self, *paths: str) -> "Report":
        from ..diff.filters import exclude_paths

        return exclude_paths(self, *paths)

    def filter_regexp(self, *patterns: str) -> "Report":
        from ..diff.filters import filter_regexp

        return filter_regexp(self, *patterns)

    def exclude_regexp(self, *patterns: str) -> "Report":
        from ..diff.filters import exclude_regexp

        return exclude_regexp(self, *patterns)
