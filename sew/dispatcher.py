"""
Action dispatch and whole-run composition.

dispatch() runs a single group against the registry; compose() runs every
group of an argument list on a fresh buffer and returns the composed bytes.
Processing stops at the first failing group and nothing is returned, so a
caller either gets the complete output or an exception.
"""

import logging
from typing import Iterable, Optional, Sequence

from .buffer import ByteBuffer
from .errors import EncodeError, MalformedExpression, UnknownAction
from .grouper import group_actions
from .registry import ActionRegistry, create_registry

logger = logging.getLogger(__name__)


def dispatch(group: Sequence[str], buffer: ByteBuffer, registry: ActionRegistry) -> None:
    """
    Resolve the group's action and append its bytes to buffer.

    Args:
        group: Non-empty action group; group[0] is the action name
        buffer: Output buffer
        registry: Actions available for lookup

    Raises:
        UnknownAction: If group[0] is not a registered action
        MalformedExpression: If the action's encoder rejects the operands
    """
    name, operands = group[0], list(group[1:])
    if name not in registry:
        raise UnknownAction(name, group)
    descriptor = registry.lookup(name)

    before = len(buffer)
    try:
        descriptor.encoder.encode(operands, buffer)
    except EncodeError as e:
        raise MalformedExpression(name, descriptor.usage, e, group) from e

    logger.debug(f"{' '.join(group)}: appended {len(buffer) - before} bytes")


def compose(tokens: Iterable[str], registry: Optional[ActionRegistry] = None) -> bytes:
    """
    Run every action group in tokens, left to right.

    Args:
        tokens: Flat argument list, groups separated by "^"
        registry: Actions to use (defaults to create_registry())

    Returns:
        bytes: Concatenation of the bytes emitted by every action

    Raises:
        DispatchError: On the first group that fails
    """
    if registry is None:
        registry = create_registry()

    buffer = ByteBuffer()
    count = 0
    for group in group_actions(tokens):
        dispatch(group, buffer, registry)
        count += 1

    logger.info(f"Composed {len(buffer)} bytes from {count} actions")
    return buffer.getvalue()
