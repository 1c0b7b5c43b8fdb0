"""
Cause chain walking.

Converts the chain of underlying causes of a raised exception into a
tree of CauseNode objects, one node per level. The walk is iterative,
detects cycles and stops at MAX_CAUSE_DEPTH with a sentinel node.
"""

from typing import Optional

from json_exception_handler.domain.models import CauseNode

MAX_CAUSE_DEPTH = 50
TRUNCATED_EXCEPTION_TYPE = "CauseChainTruncated"


def underlying_cause(exc: BaseException) -> Optional[BaseException]:
    """Return the exception that caused `exc`, if any.

    Follows the interpreter's own rule for chained tracebacks: an explicit
    ``raise ... from`` cause wins, otherwise the implicit context is used
    unless it was suppressed.
    """
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def walk_causes(
    exc: Optional[BaseException], max_depth: int = MAX_CAUSE_DEPTH
) -> Optional[CauseNode]:
    """Build the cause tree below `exc`.

    Args:
        exc: The raised exception. Its own message is not included.
        max_depth: Maximum number of cause levels to report.

    Returns:
        The head CauseNode, or None when `exc` has no underlying cause.
    """
    if exc is None:
        return None

    causes: list[BaseException] = []
    seen = {id(exc)}
    truncated = False
    cause = underlying_cause(exc)
    while cause is not None and id(cause) not in seen:
        if len(causes) >= max_depth:
            truncated = True
            break
        causes.append(cause)
        seen.add(id(cause))
        cause = underlying_cause(cause)

    node: Optional[CauseNode] = None
    if truncated:
        node = CauseNode(
            title=f"Cause chain truncated after {max_depth} levels.",
            exception_type=TRUNCATED_EXCEPTION_TYPE,
        )
    for cause in reversed(causes):
        node = CauseNode(
            title=str(cause),
            exception_type=type(cause).__name__,
            inner_exception=node,
        )
    return node
