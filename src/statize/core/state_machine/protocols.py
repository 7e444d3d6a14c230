"""
Protocol interfaces for the state machine.

This module defines the contracts between the transition engine and the
objects it collaborates with: the host that stores the current state, and
the callbacks invoked around a transition.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable


class TransitionPhase(str, Enum):
    """Phase in which a transition callback is invoked."""

    BEFORE = "before"
    """Called before the state is written. Returning False vetoes the transition."""

    AFTER = "after"
    """Called after the new state has been written. The return value is ignored."""


@dataclass(frozen=True)
class TransitionInfo:
    """Everything a callback needs to know about the transition in progress."""

    phase: TransitionPhase
    event: str
    from_state: str
    to_state: str
    host: Any
    profile: str


@runtime_checkable
class TransitionCallback(Protocol):
    """Protocol for callbacks attached to an event."""

    def __call__(self, info: TransitionInfo) -> Optional[bool]:
        """
        Handle a transition phase.

        Args:
            info: Details of the transition being performed

        Returns:
            False to veto the transition in the before phase. Any other value,
            including None, lets it proceed.
        """
        ...


@runtime_checkable
class StateHost(Protocol):
    """Protocol for the object that owns the current state value."""

    def get_state(self, name: str) -> Optional[str]:
        """
        Read the state value stored under ``name``.

        Args:
            name: The state attribute name of the active profile

        Returns:
            The stored label, or None if the host exposes no readable value
        """
        ...

    def set_state(self, name: str, value: str) -> bool:
        """
        Write the state value stored under ``name``.

        Args:
            name: The state attribute name of the active profile
            value: The new state label

        Returns:
            True if the value was written, False if the host cannot be written
        """
        ...
