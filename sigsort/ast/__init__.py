"""
Declaration tree for signature files.

The node set is closed: declarations (class, module, interface, type alias,
constant, global) and members (methods, aliases, attributes, mixins,
variables, visibility markers). Anything else is represented by
``UnknownMember``.
"""

from typing import Union

from .base import MemberKind, MethodKind, Node, Visibility
from .declarations import (
    CONTAINER_TYPES,
    ClassDecl,
    ConstantDecl,
    GlobalDecl,
    InterfaceDecl,
    ModuleDecl,
    TypeAliasDecl,
)
from .members import (
    Alias,
    AttrAccessor,
    Attribute,
    AttrReader,
    AttrWriter,
    ClassInstanceVariable,
    ClassVariable,
    Extend,
    Include,
    InstanceVariable,
    MethodDefinition,
    Mixin,
    Prepend,
    Private,
    Public,
    UnknownMember,
    Variable,
)

Container = Union[ClassDecl, ModuleDecl, InterfaceDecl]

Declaration = Union[
    ClassDecl, ModuleDecl, InterfaceDecl, TypeAliasDecl, ConstantDecl, GlobalDecl
]

Member = Union[
    Declaration,
    MethodDefinition,
    Alias,
    AttrReader,
    AttrWriter,
    AttrAccessor,
    Include,
    Prepend,
    Extend,
    ClassVariable,
    ClassInstanceVariable,
    InstanceVariable,
    Public,
    Private,
    UnknownMember,
]

__all__ = [
    "Alias",
    "AttrAccessor",
    "Attribute",
    "AttrReader",
    "AttrWriter",
    "CONTAINER_TYPES",
    "ClassDecl",
    "ClassInstanceVariable",
    "ClassVariable",
    "ConstantDecl",
    "Container",
    "Declaration",
    "Extend",
    "GlobalDecl",
    "Include",
    "InstanceVariable",
    "InterfaceDecl",
    "Member",
    "MemberKind",
    "MethodDefinition",
    "MethodKind",
    "Mixin",
    "ModuleDecl",
    "Node",
    "Prepend",
    "Private",
    "Public",
    "TypeAliasDecl",
    "UnknownMember",
    "Variable",
    "Visibility",
]
