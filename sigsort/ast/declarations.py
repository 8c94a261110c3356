"""Declaration nodes: top-level entries of a signature file that may also be nested."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .base import Node


@dataclass(frozen=True)
class ClassDecl(Node, tag="class"):
    """``class Name[T] < Super ... end``"""

    name: str
    type_params: Tuple[str, ...] = ()
    super_class: Optional[str] = None
    members: Tuple[Node, ...] = ()
    comment: Optional[str] = None


@dataclass(frozen=True)
class ModuleDecl(Node, tag="module"):
    """``module Name[T] : SelfType ... end``"""

    name: str
    type_params: Tuple[str, ...] = ()
    self_types: Tuple[str, ...] = ()
    members: Tuple[Node, ...] = ()
    comment: Optional[str] = None


@dataclass(frozen=True)
class InterfaceDecl(Node, tag="interface"):
    """``interface _Name[T] ... end``"""

    name: str
    type_params: Tuple[str, ...] = ()
    members: Tuple[Node, ...] = ()
    comment: Optional[str] = None


@dataclass(frozen=True)
class TypeAliasDecl(Node, tag="type_alias"):
    """``type name[T] = type``"""

    name: str
    type: str
    type_params: Tuple[str, ...] = ()
    comment: Optional[str] = None


@dataclass(frozen=True)
class ConstantDecl(Node, tag="constant"):
    """``NAME: type``"""

    name: str
    type: str
    comment: Optional[str] = None


@dataclass(frozen=True)
class GlobalDecl(Node, tag="global"):
    """``$name: type``"""

    name: str
    type: str
    comment: Optional[str] = None


# Declarations that own a member list and get sorted.
CONTAINER_TYPES = (ClassDecl, ModuleDecl, InterfaceDecl)
