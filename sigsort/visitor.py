"""
Tag-dispatched traversal of declaration trees.

Handlers are looked up by node tag: ``visit_<tag>`` runs before a node's
members are walked, ``leave_<tag>`` after. This mirrors the LibCST
visitor/transformer split:

- ``DeclarationVisitor`` only observes. ``visit_<tag>`` may return ``False``
  to skip the node's members.
- ``DeclarationTransformer`` rebuilds. ``leave_<tag>(original, updated)``
  returns the replacement node, or ``None`` to drop it from its parent.

Only class, module and interface declarations have members to descend into.
"""

import dataclasses
import logging
from typing import Callable, ClassVar, Dict, Iterable, List, Optional, Tuple

from .ast import CONTAINER_TYPES, Node

logger = logging.getLogger(__name__)


class _TagDispatch:
    """Per-class cache of ``<prefix>_<tag>`` handler names."""

    _tables: ClassVar[Dict[Tuple[type, str], Dict[str, Optional[str]]]] = {}

    def _handler(self, prefix: str, tag: Optional[str]) -> Optional[Callable]:
        if tag is None:
            return None
        table = _TagDispatch._tables.setdefault((type(self), prefix), {})
        if tag not in table:
            name = f"{prefix}_{tag}"
            table[tag] = name if callable(getattr(type(self), name, None)) else None
        name = table[tag]
        if name is None:
            return None
        return getattr(self, name)


class DeclarationVisitor(_TagDispatch):
    """Read-only depth-first walk over declarations and their members."""

    def visit(self, node: Node) -> None:
        tag = getattr(node, "tag", None)
        handler = self._handler("visit", tag)
        descend = handler(node) if handler is not None else self.generic_visit(node)

        if descend is not False and isinstance(node, CONTAINER_TYPES):
            for member in node.members:
                self.visit(member)

        leave = self._handler("leave", tag)
        if leave is not None:
            leave(node)

    def visit_all(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            self.visit(node)

    def generic_visit(self, node: Node) -> Optional[bool]:
        """Called for nodes without a ``visit_<tag>`` handler."""
        return None


class DeclarationTransformer(_TagDispatch):
    """Depth-first rebuild of declaration trees."""

    def transform(self, node: Node) -> Optional[Node]:
        tag = getattr(node, "tag", None)
        if tag is None:
            # not a declaration node; kept as is
            return node

        handler = self._handler("visit", tag)
        descend = handler(node) if handler is not None else None

        updated = node
        if descend is not False and isinstance(node, CONTAINER_TYPES):
            members = self.transform_all(node.members)
            if len(members) != len(node.members) or any(
                new is not old for new, old in zip(members, node.members)
            ):
                updated = dataclasses.replace(node, members=tuple(members))

        leave = self._handler("leave", tag)
        if leave is not None:
            return leave(node, updated)
        return updated

    def transform_all(self, nodes: Iterable[Node]) -> List[Node]:
        result = []
        for node in nodes:
            new_node = self.transform(node)
            if new_node is None:
                logger.debug("Dropped %s node", getattr(node, "tag", type(node).__name__))
                continue
            result.append(new_node)
        return result
