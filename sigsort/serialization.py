"""
Loading and dumping declaration trees as JSON or YAML.

A document is either a list of declaration objects or a mapping with a
``declarations`` list. Every node is an object with a ``tag`` and its
fields; sequence fields are plain lists. Nodes with an unrecognized tag are
loaded as ``UnknownMember`` and dumped back from their original payload.
"""

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import yaml

from .ast import (
    Alias,
    Attribute,
    MemberKind,
    MethodDefinition,
    MethodKind,
    Node,
    UnknownMember,
    Visibility,
)
from .errors import SerializationError

logger = logging.getLogger(__name__)

FORMATS = ("json", "yaml")

_EXTENSIONS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}

_STRING_TUPLE_FIELDS = {"type_params", "self_types", "overloads", "args"}


def detect_format(path: Union[str, Path]) -> str:
    """Pick the serialization format from a file extension."""
    suffix = Path(path).suffix.lower()
    if suffix not in _EXTENSIONS:
        raise SerializationError(
            f"Cannot detect format from extension '{suffix}' "
            f"(expected one of: {', '.join(sorted(_EXTENSIONS))})",
            str(path),
        )
    return _EXTENSIONS[suffix]


def _enum_type(cls: type, field_name: str):
    if field_name == "visibility":
        return Visibility
    if field_name == "kind":
        if issubclass(cls, MethodDefinition):
            return MethodKind
        if issubclass(cls, (Alias, Attribute)):
            return MemberKind
    return None


def _load_field(cls: type, name: str, value: Any, path: str, required: bool) -> Any:
    if name == "members":
        if not isinstance(value, list):
            raise SerializationError("'members' must be a list", path)
        return tuple(
            node_from_dict(item, f"{path}.members[{index}]")
            for index, item in enumerate(value)
        )

    if name in _STRING_TUPLE_FIELDS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise SerializationError(f"'{name}' must be a list of strings", path)
        return tuple(value)

    enum_type = _enum_type(cls, name)
    if enum_type is not None:
        if value is None and name == "visibility":
            return None
        try:
            return enum_type(value)
        except ValueError:
            allowed = [member.value for member in enum_type]
            raise SerializationError(
                f"Invalid {name} {value!r} (expected one of: {allowed})", path
            )

    if value is None and not required:
        return None
    if not isinstance(value, str):
        raise SerializationError(f"'{name}' must be a string", path)
    return value


def node_from_dict(data: Any, path: str = "node") -> Node:
    """Build a node from its dictionary form.

    Raises:
        SerializationError: If the node is not a mapping, has no tag, lacks a
            required field or carries a value of the wrong shape.
    """
    if not isinstance(data, dict):
        raise SerializationError(
            f"Expected an object with a 'tag' field, got {type(data).__name__}", path
        )
    if "tag" not in data:
        raise SerializationError("Missing required 'tag' field", path)

    tag = data["tag"]
    cls = Node.lookup(tag) if isinstance(tag, str) else None
    if cls is None:
        logger.debug("Unknown tag %r at %s; keeping it as an unknown member", tag, path)
        text = data.get("text")
        comment = data.get("comment")
        return UnknownMember(
            kind=str(tag),
            text=text if isinstance(text, str) else None,
            payload=dict(data),
            comment=comment if isinstance(comment, str) else None,
        )

    values = {}
    for field in dataclasses.fields(cls):
        required = (
            field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING
        )
        if field.name in data:
            values[field.name] = _load_field(cls, field.name, data[field.name], path, required)
        elif required:
            raise SerializationError(f"Missing required field '{field.name}' for '{tag}'", path)

    return cls(**values)


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Dictionary form of a node. Fields left at their default are omitted."""
    if isinstance(node, UnknownMember) and node.payload:
        return dict(node.payload)

    result: Dict[str, Any] = {"tag": node.tag}
    for field in dataclasses.fields(node):
        value = getattr(node, field.name)
        if field.default is not dataclasses.MISSING and value == field.default:
            continue
        if field.default_factory is not dataclasses.MISSING and value == field.default_factory():
            continue

        if field.name == "members":
            result["members"] = [node_to_dict(member) for member in value]
        elif isinstance(value, tuple):
            result[field.name] = list(value)
        elif isinstance(value, (Visibility, MethodKind, MemberKind)):
            result[field.name] = value.value
        else:
            result[field.name] = value
    return result


def load_document(data: Any) -> List[Node]:
    """Load the declarations of a parsed JSON/YAML document."""
    if data is None:
        return []
    if isinstance(data, dict):
        if "declarations" not in data:
            raise SerializationError("Missing required 'declarations' list", "document")
        data = data["declarations"]
        prefix = "declarations"
    else:
        prefix = "document"

    if not isinstance(data, list):
        raise SerializationError("Declarations must be a list", prefix)
    return [node_from_dict(item, f"{prefix}[{index}]") for index, item in enumerate(data)]


def dump_document(decls: Sequence[Node]) -> Dict[str, Any]:
    return {"declarations": [node_to_dict(decl) for decl in decls]}


def loads(text: str, fmt: str = "json") -> List[Node]:
    """Parse JSON or YAML text into declarations."""
    try:
        if fmt == "yaml":
            data = yaml.safe_load(text)
        elif fmt == "json":
            data = json.loads(text) if text.strip() else None
        else:
            raise SerializationError(f"Unsupported format '{fmt}'")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SerializationError(f"Invalid {fmt} document: {e}")
    return load_document(data)


def dumps(decls: Sequence[Node], fmt: str = "json") -> str:
    """Serialize declarations to JSON or YAML text."""
    document = dump_document(decls)
    if fmt == "yaml":
        return yaml.safe_dump(
            document, default_flow_style=False, sort_keys=False, allow_unicode=True, indent=2
        )
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    raise SerializationError(f"Unsupported format '{fmt}'")


def load_file(path: Union[str, Path], fmt: str = "auto") -> List[Node]:
    """Read declarations from a JSON or YAML file.

    Raises:
        OSError: If the file cannot be read
        SerializationError: If the content is not a valid declaration tree
    """
    path = Path(path)
    if fmt == "auto":
        fmt = detect_format(path)
    text = path.read_text(encoding="utf-8")
    try:
        return loads(text, fmt)
    except SerializationError as e:
        raise SerializationError(str(e), str(path)) from e
