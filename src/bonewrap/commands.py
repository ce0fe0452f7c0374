"""
Published commands.

Each command is one fixed operation configuration. Commands take no arguments
beyond the host: they act on the current selection when it is non-empty and on
the whole project otherwise. Their only outputs are the committed transaction
and the notice shown through the host.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeAlias

from bonewrap.constants import (
    STRATEGY_ADDITIVE,
    STRATEGY_MATRIX,
    UNWRAP_ANY,
    UNWRAP_NAMED,
    WRAP_FIX_ILLEGAL,
    WRAP_FORCE_ALL,
)
from bonewrap.host import Host
from bonewrap.operations import UnwrapConfig, UnwrapOperation, WrapConfig, WrapOperation
from bonewrap.operations.report import OperationReport

logger = logging.getLogger(__name__)

Operation: TypeAlias = Callable[[Host], OperationReport]

COMMANDS: dict[str, Operation] = {
    # Wrapping
    "fix-illegal-wrap": WrapOperation(WrapConfig(mode=WRAP_FIX_ILLEGAL)),
    "force-wrap-zero": WrapOperation(WrapConfig(mode=WRAP_FORCE_ALL)),
    "add-zero-rotation-group": WrapOperation(
        WrapConfig(mode=WRAP_FORCE_ALL, preserve_rotation=True)
    ),
    # Unwrapping, exact composition
    "unwrap-by-name": UnwrapOperation(UnwrapConfig(strategy=STRATEGY_MATRIX, mode=UNWRAP_NAMED)),
    "unwrap-any": UnwrapOperation(UnwrapConfig(strategy=STRATEGY_MATRIX, mode=UNWRAP_ANY)),
    "unwrap-any-recursive": UnwrapOperation(
        UnwrapConfig(strategy=STRATEGY_MATRIX, mode=UNWRAP_ANY, recursive=True)
    ),
    # Unwrapping, additive composition (axis-aligned rigs only)
    "unwrap-by-name-additive": UnwrapOperation(
        UnwrapConfig(strategy=STRATEGY_ADDITIVE, mode=UNWRAP_NAMED)
    ),
    "unwrap-any-recursive-additive": UnwrapOperation(
        UnwrapConfig(strategy=STRATEGY_ADDITIVE, mode=UNWRAP_ANY, recursive=True)
    ),
}


def available_commands() -> list[str]:
    return list(COMMANDS)


def run_command(name: str, host: Host) -> None:
    """
    Run a published command against a host.

    Raises:
        KeyError: If ``name`` is not a published command
    """
    try:
        operation = COMMANDS[name]
    except KeyError:
        raise KeyError(
            f"Unknown command '{name}'. Valid options are: {', '.join(sorted(COMMANDS))}"
        ) from None

    logger.info("[Commands] Running '%s'", name)
    report = operation(host)
    logger.debug("[Commands] '%s' finished: %s", name, report)
