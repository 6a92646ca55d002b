"""Contract of remediation actions.

Why Protocol with defaults:
- Concrete actions subclass it explicitly to inherit `name()`/`__str__`.
- The entry point only knows this contract, so new actions never touch it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

DEFAULT_ACTION_NAME = "Invalid Action"


@runtime_checkable
class RemediationAction(Protocol):
    """A named, executable remediation operation."""

    def execute(self) -> None:
        """Run the action. Errors propagate to the entry point."""

        ...

    def name(self) -> str:
        """Human label shown in menus. Actions without one report the sentinel."""

        return DEFAULT_ACTION_NAME

    def __str__(self) -> str:
        return self.name()
