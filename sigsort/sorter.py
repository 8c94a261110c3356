"""
Canonical member ordering for class, module and interface declarations.

Members of one declaration are classified into a fixed sequence of
categories in a single left-to-right pass and re-emitted bucket by bucket.
Members are never compared with each other, so the order inside a bucket is
always the input order.

Visibility is derived while scanning: ``public``/``private`` markers change
the running visibility and are consumed. A method, attribute or alias that
ends up private only because of a marker gets ``visibility=PRIVATE`` stamped
on it, so the output means the same thing without the markers.
"""

import dataclasses
import logging
from collections import Counter
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from .ast import (
    CONTAINER_TYPES,
    Alias,
    Attribute,
    AttrAccessor,
    AttrReader,
    AttrWriter,
    ClassDecl,
    ClassInstanceVariable,
    ClassVariable,
    ConstantDecl,
    Extend,
    Include,
    InstanceVariable,
    InterfaceDecl,
    MemberKind,
    MethodDefinition,
    MethodKind,
    ModuleDecl,
    Node,
    Prepend,
    Private,
    Public,
    TypeAliasDecl,
    Visibility,
)
from .visitor import DeclarationTransformer, DeclarationVisitor

logger = logging.getLogger(__name__)


class Category(Enum):
    """Member categories, in output order."""

    TYPE_ALIAS = "type_alias"
    CONSTANT = "constant"
    NESTED_DECLARATION = "nested_declaration"
    INCLUDE = "include"
    PREPEND = "prepend"
    EXTEND = "extend"
    CLASS_VARIABLE = "class_variable"
    CLASS_INSTANCE_VARIABLE = "class_instance_variable"
    INSTANCE_VARIABLE = "instance_variable"
    SINGLETON_ATTRIBUTE = "singleton_attribute"
    INSTANCE_ATTRIBUTE = "instance_attribute"
    MODULE_FUNCTION = "module_function"
    SINGLETON_NEW = "singleton_new"
    PUBLIC_SINGLETON_METHOD = "public_singleton_method"
    PRIVATE_SINGLETON_METHOD = "private_singleton_method"
    INSTANCE_INITIALIZE = "instance_initialize"
    PUBLIC_INSTANCE_METHOD = "public_instance_method"
    PRIVATE_INSTANCE_METHOD = "private_instance_method"
    OTHER = "other"


# Categories that depend only on the node tag.
_FIXED_CATEGORIES: Dict[str, Category] = {
    TypeAliasDecl.tag: Category.TYPE_ALIAS,
    ConstantDecl.tag: Category.CONSTANT,
    ClassDecl.tag: Category.NESTED_DECLARATION,
    ModuleDecl.tag: Category.NESTED_DECLARATION,
    InterfaceDecl.tag: Category.NESTED_DECLARATION,
    Include.tag: Category.INCLUDE,
    Prepend.tag: Category.PREPEND,
    Extend.tag: Category.EXTEND,
    ClassVariable.tag: Category.CLASS_VARIABLE,
    ClassInstanceVariable.tag: Category.CLASS_INSTANCE_VARIABLE,
    InstanceVariable.tag: Category.INSTANCE_VARIABLE,
}

_MARKERS: Dict[str, Visibility] = {
    Public.tag: Visibility.PUBLIC,
    Private.tag: Visibility.PRIVATE,
}

_ATTRIBUTE_TAGS = (AttrReader.tag, AttrWriter.tag, AttrAccessor.tag)

_MethodKey = Tuple[MemberKind, str]


def _method_scope(kind: MethodKind) -> MemberKind:
    return MemberKind.SINGLETON if kind is MethodKind.SINGLETON else MemberKind.INSTANCE


def _widest(visibilities: Set[Visibility]) -> Visibility:
    return Visibility.PUBLIC if Visibility.PUBLIC in visibilities else Visibility.PRIVATE


class _VisibilityFold:
    """Running-visibility scan over one member list.

    Produces the effective visibility of every visibility-bearing member
    (``None`` for the rest) and resolves alias targets against the methods
    and attributes defined anywhere in the same list. A name defined more
    than once resolves to public if any of its definitions is public, so
    the result does not depend on member order.
    """

    def __init__(self, members: Sequence[Node]):
        self.members = members
        self.effective: List[Optional[Visibility]] = []
        self._methods: Dict[_MethodKey, Set[Visibility]] = {}
        self._aliases: Dict[_MethodKey, List[Tuple[Alias, Visibility]]] = {}
        self._scan()

    def _scan(self) -> None:
        running = Visibility.PUBLIC
        alias_positions: List[Tuple[int, Alias, Visibility]] = []

        for index, member in enumerate(self.members):
            tag = getattr(member, "tag", None)
            if tag in _MARKERS:
                running = _MARKERS[tag]
                self.effective.append(None)
            elif isinstance(member, MethodDefinition):
                visibility = member.visibility or running
                self._define_method(member, visibility)
                self.effective.append(visibility)
            elif isinstance(member, Attribute) and tag in _ATTRIBUTE_TAGS:
                visibility = member.visibility or running
                self._define_attribute(member, visibility)
                self.effective.append(visibility)
            elif isinstance(member, Alias):
                self._aliases.setdefault((member.kind, member.new_name), []).append((member, running))
                alias_positions.append((index, member, running))
                self.effective.append(running)
            else:
                self.effective.append(None)

        for index, alias, running_at in alias_positions:
            self.effective[index] = self._alias_visibility(alias, running_at, frozenset())

    def _define_method(self, method: MethodDefinition, visibility: Visibility) -> None:
        if method.kind is MethodKind.SINGLETON_INSTANCE:
            # def self?.name: public singleton method plus private instance method
            self._record((MemberKind.SINGLETON, method.name), Visibility.PUBLIC)
            self._record((MemberKind.INSTANCE, method.name), Visibility.PRIVATE)
        else:
            self._record((_method_scope(method.kind), method.name), visibility)

    def _define_attribute(self, attribute: Attribute, visibility: Visibility) -> None:
        if attribute.tag in (AttrReader.tag, AttrAccessor.tag):
            self._record((attribute.kind, attribute.name), visibility)
        if attribute.tag in (AttrWriter.tag, AttrAccessor.tag):
            self._record((attribute.kind, attribute.name + "="), visibility)

    def _record(self, key: _MethodKey, visibility: Visibility) -> None:
        self._methods.setdefault(key, set()).add(visibility)

    def _alias_visibility(
        self, alias: Alias, running_at: Visibility, seen: FrozenSet[_MethodKey]
    ) -> Visibility:
        if alias.visibility is not None:
            return alias.visibility

        key = (alias.kind, alias.old_name)
        if key in self._methods:
            return _widest(self._methods[key])

        targets = self._aliases.get(key)
        if targets and key not in seen:
            seen = seen | {key}
            return _widest(
                {self._alias_visibility(target, running, seen) for target, running in targets}
            )

        logger.debug(
            "Alias target %s of %s not found; using %s visibility",
            alias.old_name,
            alias.new_name,
            running_at.value,
        )
        return running_at


def _classify_method(method: MethodDefinition, visibility: Visibility) -> Category:
    public = visibility is Visibility.PUBLIC

    if method.kind is MethodKind.SINGLETON_INSTANCE:
        return Category.MODULE_FUNCTION
    if method.kind is MethodKind.SINGLETON:
        if method.is_constructor:
            return Category.SINGLETON_NEW
        return (
            Category.PUBLIC_SINGLETON_METHOD if public else Category.PRIVATE_SINGLETON_METHOD
        )
    if method.is_constructor and public:
        return Category.INSTANCE_INITIALIZE
    return Category.PUBLIC_INSTANCE_METHOD if public else Category.PRIVATE_INSTANCE_METHOD


def _classify(member: Node, visibility: Optional[Visibility]) -> Category:
    category = _FIXED_CATEGORIES.get(getattr(member, "tag", None))
    if category is not None:
        return category

    if isinstance(member, MethodDefinition) and visibility is not None:
        return _classify_method(member, visibility)

    if isinstance(member, Alias) and visibility is not None:
        public = visibility is Visibility.PUBLIC
        if member.is_singleton:
            return (
                Category.PUBLIC_SINGLETON_METHOD if public else Category.PRIVATE_SINGLETON_METHOD
            )
        return Category.PUBLIC_INSTANCE_METHOD if public else Category.PRIVATE_INSTANCE_METHOD

    if isinstance(member, Attribute) and member.tag in _ATTRIBUTE_TAGS:
        return Category.SINGLETON_ATTRIBUTE if member.is_singleton else Category.INSTANCE_ATTRIBUTE

    return Category.OTHER


def _stamp(member: Node, visibility: Optional[Visibility]) -> Node:
    """Make a marker-derived private visibility explicit on the member."""
    if visibility is not Visibility.PRIVATE:
        return member
    if isinstance(member, MethodDefinition) and member.kind is MethodKind.SINGLETON_INSTANCE:
        return member
    if isinstance(member, (MethodDefinition, Attribute, Alias)) and member.visibility is None:
        return dataclasses.replace(member, visibility=Visibility.PRIVATE)
    return member


def categorize(members: Iterable[Node]) -> List[Tuple[Category, Node]]:
    """Classify members in input order.

    Visibility markers are consumed and do not appear in the result.
    """
    members = list(members)
    fold = _VisibilityFold(members)

    result = []
    for member, visibility in zip(members, fold.effective):
        if getattr(member, "tag", None) in _MARKERS:
            continue
        result.append((_classify(member, visibility), _stamp(member, visibility)))
    return result


def partition(members: Iterable[Node]) -> Dict[Category, List[Node]]:
    """Group members into every category, keeping input order inside each."""
    buckets: Dict[Category, List[Node]] = {category: [] for category in Category}
    for category, member in categorize(members):
        buckets[category].append(member)
    return buckets


def sort_members(members: Iterable[Node]) -> List[Node]:
    """Return the members of one declaration in canonical order."""
    result: List[Node] = []
    for bucket in partition(members).values():
        result.extend(bucket)
    return result


def sort_declaration(decl: Node, recursive: bool = True) -> Node:
    """Sort a class, module or interface. Other nodes are returned unchanged."""
    if not isinstance(decl, CONTAINER_TYPES):
        return decl
    return DeclarationSorter(recursive=recursive).transform(decl)


def sort_declarations(decls: Iterable[Node], recursive: bool = True) -> List[Node]:
    """Sort every declaration of a file. Top-level order is kept."""
    return DeclarationSorter(recursive=recursive).transform_all(decls)


def is_sorted(decls: Iterable[Node], recursive: bool = True) -> bool:
    """True when sorting would not change anything."""
    decls = list(decls)
    return sort_declarations(decls, recursive=recursive) == decls


class DeclarationSorter(DeclarationTransformer):
    """Transformer that sorts the members of every container it leaves.

    With ``recursive=False`` only the outermost containers are sorted and
    nested declarations are left as they are.
    """

    def __init__(self, recursive: bool = True):
        self.recursive = recursive

    def _enter(self, node: Node) -> bool:
        return self.recursive

    def _leave(self, original: Node, updated: Node) -> Node:
        members = sort_members(updated.members)
        if len(members) == len(updated.members) and all(
            new is old for new, old in zip(members, updated.members)
        ):
            return updated
        return dataclasses.replace(updated, members=tuple(members))

    def visit_class(self, node: ClassDecl) -> bool:
        return self._enter(node)

    def visit_module(self, node: ModuleDecl) -> bool:
        return self._enter(node)

    def visit_interface(self, node: InterfaceDecl) -> bool:
        return self._enter(node)

    def leave_class(self, original: ClassDecl, updated: ClassDecl) -> ClassDecl:
        return self._leave(original, updated)

    def leave_module(self, original: ModuleDecl, updated: ModuleDecl) -> ModuleDecl:
        return self._leave(original, updated)

    def leave_interface(self, original: InterfaceDecl, updated: InterfaceDecl) -> InterfaceDecl:
        return self._leave(original, updated)


class CategoryCounter(DeclarationVisitor):
    """Counts member categories per container, keyed by qualified name.

    A class or module declared more than once in a file is counted as one.
    """

    def __init__(self):
        self.counts: Dict[str, Counter] = {}
        self._names: List[str] = []

    def _enter(self, node: Node) -> None:
        self._names.append(node.name)
        name = "::".join(self._names)
        self.counts.setdefault(name, Counter()).update(
            category for category, _ in categorize(node.members)
        )

    def _leave(self, node: Node) -> None:
        self._names.pop()

    def visit_class(self, node: ClassDecl) -> None:
        self._enter(node)

    def visit_module(self, node: ModuleDecl) -> None:
        self._enter(node)

    def visit_interface(self, node: InterfaceDecl) -> None:
        self._enter(node)

    def leave_class(self, node: ClassDecl) -> None:
        self._leave(node)

    def leave_module(self, node: ModuleDecl) -> None:
        self._leave(node)

    def leave_interface(self, node: InterfaceDecl) -> None:
        self._leave(node)
