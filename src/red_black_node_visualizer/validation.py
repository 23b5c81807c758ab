"""ValidatorBridge: runs the tree library's validation hooks without failing.

The bridge calls a ``NodeValidator`` and turns any exception it raises into
display text of the form ``"<ExceptionName>: <message>"``.  Failures are
never propagated, so one broken node cannot stop the export of the rest of
the tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from red_black_node_visualizer.protocols import NodeValidator

logger = logging.getLogger(__name__)

__all__ = ["HookValidator", "ValidatorBridge", "describe_exception"]


def describe_exception(exception: BaseException) -> str:
    """Return ``"<ExceptionName>: <message>"`` for ``exception``.

    The message part is dropped when the exception has none.
    """
    message = str(exception)
    name = type(exception).__name__
    return f"{name}: {message}" if message else name


class HookValidator:
    """Default ``NodeValidator``: calls the hooks defined on the nodes themselves.

    A node without a ``check_node`` or ``check_subtree`` method is treated as
    passing that check.
    """

    def check_node(self, node: Any) -> None:
        check = getattr(node, "check_node", None)
        if check is not None:
            check()

    def check_subtree(self, node: Any) -> None:
        check = getattr(node, "check_subtree", None)
        if check is not None:
            check()


class ValidatorBridge:
    """Captures validation failures as text.

    Args:
        validator: Any ``NodeValidator``-conformant object.  Defaults to
            ``HookValidator()`` when None.
    """

    def __init__(self, validator: NodeValidator | None = None) -> None:
        self._validator: Any = validator if validator is not None else HookValidator()

    def node_error(self, node: Any) -> str | None:
        """Run the per-node check; return the failure text or None."""
        try:
            self._validator.check_node(node)
        except Exception as exception:
            logger.debug("check_node failed for %r: %s", node, exception)
            return describe_exception(exception)
        return None

    def subtree_error(self, root: Any) -> str | None:
        """Run the whole-subtree check on ``root``; return the failure text or None."""
        try:
            self._validator.check_subtree(root)
        except Exception as exception:
            logger.debug("check_subtree failed for %r: %s", root, exception)
            return describe_exception(exception)
        return None
