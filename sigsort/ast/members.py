"""Member nodes: everything that can appear inside a class, module or interface body."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .base import MemberKind, MethodKind, Node, Visibility


@dataclass(frozen=True)
class MethodDefinition(Node, tag="method"):
    """``def name: (sig) -> ret | ...``"""

    name: str
    kind: MethodKind = MethodKind.INSTANCE
    overloads: Tuple[str, ...] = ()
    visibility: Optional[Visibility] = None
    comment: Optional[str] = None

    @property
    def is_constructor(self) -> bool:
        if self.kind is MethodKind.SINGLETON:
            return self.name == "new"
        if self.kind is MethodKind.INSTANCE:
            return self.name == "initialize"
        return False


@dataclass(frozen=True)
class Alias(Node, tag="alias"):
    """``alias new_name old_name`` (``alias self.a self.b`` for singleton aliases)."""

    new_name: str
    old_name: str
    kind: MemberKind = MemberKind.INSTANCE
    visibility: Optional[Visibility] = None
    comment: Optional[str] = None

    @property
    def is_singleton(self) -> bool:
        return self.kind is MemberKind.SINGLETON


@dataclass(frozen=True)
class Attribute(Node):
    """Common shape of attr_reader / attr_writer / attr_accessor.

    ``ivar_name`` is ``None`` for the default instance variable, ``""`` for
    ``()`` (no backing variable) and the variable name otherwise.
    """

    name: str
    type: str
    kind: MemberKind = MemberKind.INSTANCE
    ivar_name: Optional[str] = None
    visibility: Optional[Visibility] = None
    comment: Optional[str] = None

    @property
    def is_singleton(self) -> bool:
        return self.kind is MemberKind.SINGLETON


@dataclass(frozen=True)
class AttrReader(Attribute, tag="attr_reader"):
    pass


@dataclass(frozen=True)
class AttrWriter(Attribute, tag="attr_writer"):
    pass


@dataclass(frozen=True)
class AttrAccessor(Attribute, tag="attr_accessor"):
    pass


@dataclass(frozen=True)
class Mixin(Node):
    """Common shape of include / prepend / extend."""

    name: str
    args: Tuple[str, ...] = ()
    comment: Optional[str] = None


@dataclass(frozen=True)
class Include(Mixin, tag="include"):
    pass


@dataclass(frozen=True)
class Prepend(Mixin, tag="prepend"):
    pass


@dataclass(frozen=True)
class Extend(Mixin, tag="extend"):
    pass


@dataclass(frozen=True)
class Variable(Node):
    name: str
    type: str
    comment: Optional[str] = None


@dataclass(frozen=True)
class ClassVariable(Variable, tag="class_variable"):
    """``@@name: T``"""


@dataclass(frozen=True)
class ClassInstanceVariable(Variable, tag="class_instance_variable"):
    """``self.@name: T``"""


@dataclass(frozen=True)
class InstanceVariable(Variable, tag="instance_variable"):
    """``@name: T``"""


@dataclass(frozen=True)
class Public(Node, tag="public"):
    """Visibility marker; members after it default to public."""

    comment: Optional[str] = None


@dataclass(frozen=True)
class Private(Node, tag="private"):
    """Visibility marker; members after it default to private."""

    comment: Optional[str] = None


@dataclass(frozen=True)
class UnknownMember(Node, tag="unknown"):
    """A member whose tag is not recognized.

    It carries the original ``kind`` tag, an optional ``text`` rendering and
    the raw payload so the node can be dumped back unchanged.
    """

    kind: str
    text: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict, compare=False)
    comment: Optional[str] = None
