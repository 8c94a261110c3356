"""
Node base class and the enums shared by declarations and members.

Every concrete node class declares a ``tag`` through its class statement
(``class ClassDecl(Node, tag="class")``). Tags key the registry used by
serialization and by visitor dispatch, so they must be unique.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Optional, Type


class Visibility(Enum):
    """Visibility of a method, attribute or alias."""

    PUBLIC = "public"
    PRIVATE = "private"


class MethodKind(Enum):
    """Scope of a method definition."""

    INSTANCE = "instance"
    SINGLETON = "singleton"  # def self.foo
    SINGLETON_INSTANCE = "singleton_instance"  # def self?.foo (module function)


class MemberKind(Enum):
    """Scope of an attribute or alias."""

    INSTANCE = "instance"
    SINGLETON = "singleton"


@dataclass(frozen=True)
class Node:
    """Base for every declaration and member node."""

    tag: ClassVar[str] = ""
    registry: ClassVar[Dict[str, Type["Node"]]] = {}

    def __init_subclass__(cls, tag: Optional[str] = None, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if tag is None:
            return

        existing = Node.registry.get(tag)
        if existing is not None and existing is not cls:
            raise ValueError(
                f"Tag '{tag}' already registered to {existing.__name__}. "
                "Choose a different tag."
            )

        cls.tag = tag
        Node.registry[tag] = cls

    @classmethod
    def lookup(cls, tag: str) -> Optional[Type["Node"]]:
        """Return the node class registered for ``tag``, if any."""
        return Node.registry.get(tag)
