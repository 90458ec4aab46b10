"""
Helpers around PyYAML's composed node graph (``yaml.compose`` /
``yaml.compose_all``): type labels and compact JSON text for any node.
"""
from __future__ import annotations

import json
import math
from typing import Any, Optional

import yaml
from yaml.constructor import ConstructorError, SafeConstructor
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from ..errors import NodeSerializationError

YAML_TAG_PREFIX = "tag:yaml.org,2002:"

STR_TAG = YAML_TAG_PREFIX + "str"
INT_TAG = YAML_TAG_PREFIX + "int"
FLOAT_TAG = YAML_TAG_PREFIX + "float"
BOOL_TAG = YAML_TAG_PREFIX + "bool"
NULL_TAG = YAML_TAG_PREFIX + "null"
BINARY_TAG = YAML_TAG_PREFIX + "binary"

_constructor = SafeConstructor()

_SCALAR_BUILDERS = {
    INT_TAG: _constructor.construct_yaml_int,
    FLOAT_TAG: _constructor.construct_yaml_float,
    BOOL_TAG: _constructor.construct_yaml_bool,
}


def short_tag(tag: Optional[str]) -> str:
    if not tag:
        return ""
    if tag.startswith(YAML_TAG_PREFIX):
        return tag[len(YAML_TAG_PREFIX):]
    return tag


def human_readable_type(node: Optional[Node]) -> str:
    if node is None:
        return "null"
    if isinstance(node, SequenceNode):
        return "list"
    if isinstance(node, MappingNode):
        return "map"
    if isinstance(node, ScalarNode):
        if node.tag == STR_TAG:
            return "string"
        return short_tag(node.tag) or "string"
    raise NodeSerializationError(f"unknown node type {type(node).__name__}")


def scalar_value(node: Optional[Node]) -> str:
    """Raw text of a scalar node, empty string for everything else."""
    if isinstance(node, ScalarNode):
        return node.value
    return ""


def _to_python(node: Node) -> Any:
    if isinstance(node, ScalarNode):
        if node.tag == STR_TAG:
            return node.value
        if node.tag == NULL_TAG:
            return None
        builder = _SCALAR_BUILDERS.get(node.tag)
        if builder is None:
            # binary, timestamp and custom tags keep their source text
            return node.value
        try:
            value = builder(node)
        except (ConstructorError, KeyError, ValueError) as exc:
            raise NodeSerializationError(f"cannot convert {node.value!r} to {short_tag(node.tag)}: {exc}") from exc
        if isinstance(value, float) and not math.isfinite(value):
            raise NodeSerializationError(f"{node.value!r} has no JSON representation")
        return value
    if isinstance(node, SequenceNode):
        return [_to_python(child) for child in node.value]
    if isinstance(node, MappingNode):
        result = {}
        for key_node, value_node in node.value:
            key = key_node.value if isinstance(key_node, ScalarNode) else to_compact_json(key_node)
            result[key] = _to_python(value_node)
        return result
    raise NodeSerializationError(f"unknown node type {type(node).__name__}")


def to_compact_json(node: Optional[Node]) -> str:
    """Compact single-line JSON text for ``node``; ``None`` is ``null``."""
    if node is None:
        return "null"
    return json.dumps(_to_python(node), ensure_ascii=False)


def compose_documents(text: str):
    """All documents of a YAML stream as composed root nodes."""
    return tuple(node for node in yaml.compose_all(text, Loader=yaml.SafeLoader) if node is not None)
