"""
Stub text output for declaration trees.

``StubWriter`` is a ``DeclarationVisitor``: container headers are written on
``visit_<tag>`` and the closing ``end`` on ``leave_<tag>``. Aliases cannot
carry a visibility keyword in stub syntax, so an alias whose explicit
visibility differs from the current section is preceded by a marker line and
the section is restored before the next member.
"""

import logging
from typing import Iterable, List, Optional

from .ast import (
    Alias,
    AttrAccessor,
    AttrReader,
    AttrWriter,
    Attribute,
    ClassDecl,
    ClassInstanceVariable,
    ClassVariable,
    ConstantDecl,
    Extend,
    GlobalDecl,
    Include,
    InstanceVariable,
    InterfaceDecl,
    MethodDefinition,
    MethodKind,
    Mixin,
    ModuleDecl,
    Node,
    Prepend,
    Private,
    Public,
    TypeAliasDecl,
    UnknownMember,
    Visibility,
)
from .visitor import DeclarationVisitor

logger = logging.getLogger(__name__)

_METHOD_PREFIX = {
    MethodKind.INSTANCE: "",
    MethodKind.SINGLETON: "self.",
    MethodKind.SINGLETON_INSTANCE: "self?.",
}


def _type_params(params) -> str:
    return f"[{', '.join(params)}]" if params else ""


def _visibility_prefix(visibility: Optional[Visibility]) -> str:
    return f"{visibility.value} " if visibility is not None else ""


class _Section:
    """Visibility state of one container body while writing."""

    def __init__(self):
        self.declared = Visibility.PUBLIC
        self.current = Visibility.PUBLIC


class StubWriter(DeclarationVisitor):
    """Renders declarations as stub text."""

    def __init__(self, indent: int = 2):
        self.indent = indent
        self.lines: List[str] = []
        self._level = 0
        self._sections: List[_Section] = []

    def write(self, decls: Iterable[Node]) -> str:
        self.lines = []
        for index, decl in enumerate(decls):
            if index:
                self.lines.append("")
            self.visit(decl)
        return "\n".join(self.lines) + "\n" if self.lines else ""

    # -- output helpers ---------------------------------------------------

    def _emit(self, text: str) -> None:
        self.lines.append(" " * (self.indent * self._level) + text)

    def _emit_comment(self, node: Node) -> None:
        comment = getattr(node, "comment", None)
        if not comment:
            return
        for line in comment.splitlines():
            self._emit(f"# {line}".rstrip())

    def _restore_section(self) -> None:
        if not self._sections:
            return
        section = self._sections[-1]
        if section.current is not section.declared:
            self._emit(section.declared.value)
            section.current = section.declared

    def _open(self, node: Node, header: str) -> None:
        self._restore_section()
        self._emit_comment(node)
        self._emit(header)
        self._level += 1
        self._sections.append(_Section())

    def _close(self) -> None:
        self._sections.pop()
        self._level -= 1
        self._emit("end")

    def _line(self, node: Node, text: str) -> None:
        self._restore_section()
        self._emit_comment(node)
        self._emit(text)

    # -- containers -------------------------------------------------------

    def visit_class(self, node: ClassDecl) -> None:
        header = f"class {node.name}{_type_params(node.type_params)}"
        if node.super_class:
            header += f" < {node.super_class}"
        self._open(node, header)

    def visit_module(self, node: ModuleDecl) -> None:
        header = f"module {node.name}{_type_params(node.type_params)}"
        if node.self_types:
            header += f" : {', '.join(node.self_types)}"
        self._open(node, header)

    def visit_interface(self, node: InterfaceDecl) -> None:
        self._open(node, f"interface {node.name}{_type_params(node.type_params)}")

    def leave_class(self, node: ClassDecl) -> None:
        self._close()

    def leave_module(self, node: ModuleDecl) -> None:
        self._close()

    def leave_interface(self, node: InterfaceDecl) -> None:
        self._close()

    # -- declarations -----------------------------------------------------

    def visit_type_alias(self, node: TypeAliasDecl) -> None:
        self._line(node, f"type {node.name}{_type_params(node.type_params)} = {node.type}")

    def visit_constant(self, node: ConstantDecl) -> None:
        self._line(node, f"{node.name}: {node.type}")

    def visit_global(self, node: GlobalDecl) -> None:
        self._line(node, f"${node.name.lstrip('$')}: {node.type}")

    # -- members ----------------------------------------------------------

    def visit_method(self, node: MethodDefinition) -> None:
        head = f"{_visibility_prefix(node.visibility)}def {_METHOD_PREFIX[node.kind]}{node.name}"
        overloads = node.overloads or ("() -> untyped",)
        self._line(node, f"{head}: {overloads[0]}")
        for overload in overloads[1:]:
            self._emit(f"{' ' * len(head)}| {overload}")

    def visit_alias(self, node: Alias) -> None:
        if self._sections:
            section = self._sections[-1]
            wanted = node.visibility or section.declared
            if wanted is not section.current:
                self._emit(wanted.value)
                section.current = wanted
        self._emit_comment(node)
        prefix = "self." if node.is_singleton else ""
        self._emit(f"alias {prefix}{node.new_name} {prefix}{node.old_name}")

    def _attribute(self, node: Attribute, keyword: str) -> None:
        name = f"self.{node.name}" if node.is_singleton else node.name
        if node.ivar_name is None:
            ivar = ""
        elif node.ivar_name == "":
            ivar = " ()"
        else:
            ivar = f" (@{node.ivar_name.lstrip('@')})"
        text = f"{_visibility_prefix(node.visibility)}{keyword} {name}{ivar}: {node.type}"
        self._line(node, text)

    def visit_attr_reader(self, node: AttrReader) -> None:
        self._attribute(node, "attr_reader")

    def visit_attr_writer(self, node: AttrWriter) -> None:
        self._attribute(node, "attr_writer")

    def visit_attr_accessor(self, node: AttrAccessor) -> None:
        self._attribute(node, "attr_accessor")

    def _mixin(self, node: Mixin, keyword: str) -> None:
        self._line(node, f"{keyword} {node.name}{_type_params(node.args)}")

    def visit_include(self, node: Include) -> None:
        self._mixin(node, "include")

    def visit_prepend(self, node: Prepend) -> None:
        self._mixin(node, "prepend")

    def visit_extend(self, node: Extend) -> None:
        self._mixin(node, "extend")

    def visit_class_variable(self, node: ClassVariable) -> None:
        self._line(node, f"@@{node.name.lstrip('@')}: {node.type}")

    def visit_class_instance_variable(self, node: ClassInstanceVariable) -> None:
        self._line(node, f"self.@{node.name.lstrip('@')}: {node.type}")

    def visit_instance_variable(self, node: InstanceVariable) -> None:
        self._line(node, f"@{node.name.lstrip('@')}: {node.type}")

    def _marker(self, node: Node, visibility: Visibility) -> None:
        self._emit_comment(node)
        self._emit(visibility.value)
        if self._sections:
            self._sections[-1].declared = visibility
            self._sections[-1].current = visibility

    def visit_public(self, node: Public) -> None:
        self._marker(node, Visibility.PUBLIC)

    def visit_private(self, node: Private) -> None:
        self._marker(node, Visibility.PRIVATE)

    def visit_unknown(self, node: UnknownMember) -> None:
        if node.text is None:
            logger.debug("No text for unknown member '%s'; writing a comment", node.kind)
        text = node.text if node.text is not None else f"# unknown member: {node.kind}"
        self._restore_section()
        self._emit_comment(node)
        for line in text.splitlines() or [text]:
            self._emit(line)

    def generic_visit(self, node: Node) -> Optional[bool]:
        logger.warning("No writer for %s", getattr(node, "tag", None) or type(node).__name__)
        return None


def write_declarations(decls: Iterable[Node], indent: int = 2) -> str:
    """Render declarations as stub text."""
    return StubWriter(indent=indent).write(decls)