"""
Transition engine.

The engine is purely table driven: every decision is made by looking up the
active profile's Spec. It performs direct jumps (``apply_state``) and
event-driven transitions (``trigger_event``) with the before/after callback
protocol.
"""

import logging
from typing import Any, List, Optional

from .controller import InstanceController
from .errors import (
    InvalidEventError,
    InvalidStateError,
    InvalidStateForEventError,
    UserHaltError,
)
from .labels import Label, coerce_label
from .protocols import TransitionCallback, TransitionInfo, TransitionPhase

logger = logging.getLogger(__name__)


class TransitionEngine:
    """Validates and performs state changes for one host instance."""

    def __init__(self, controller: InstanceController, host: Any):
        """
        Initialize the engine.

        Args:
            controller: The instance controller of the host
            host: The host object, handed to callbacks
        """
        self._controller = controller
        self._host = host

    def next_states(self) -> List[Label]:
        """States reachable from the current state, empty if there are none."""
        return list(self._controller.spec.next_states(self._controller.current_state()))

    def next_events(self) -> List[Label]:
        """Events registered with the current state as their source."""
        return list(self._controller.spec.next_events(self._controller.current_state()))

    def apply_state(self, state: Any) -> bool:
        """
        Jump directly to ``state`` if it is reachable from the current state.

        Returns:
            True if the state was applied, False otherwise (nothing is written)
        """
        candidate = coerce_label(state)
        if candidate is None or candidate not in self.next_states():
            logger.debug(
                f"State {state!r} is not reachable from "
                f"'{self._controller.current_state()}'"
            )
            return False
        self._controller.write(candidate)
        return True

    def apply_state_strict(self, state: Any) -> None:
        """
        Like apply_state, but raises instead of returning False.

        Raises:
            InvalidStateError: If ``state`` is not reachable from the current state
        """
        if not self.apply_state(state):
            label = coerce_label(state)
            raise InvalidStateError(
                repr(state) if label is None else label,
                self._controller.current_state(),
            )

    def can_trigger(self, event: Any) -> bool:
        """Check whether ``event`` is valid from the current state."""
        current = self._controller.current_state()
        if not current:
            return False
        table = self._controller.spec.event_states_table.get(coerce_label(event))
        return bool(table and table.get(current))

    def trigger_event(
        self, event: Any, callback: Optional[TransitionCallback] = None
    ) -> Optional[Label]:
        """
        Fire ``event`` from the current state.

        Args:
            event: The event name
            callback: Optional extra callback, invoked once after the transition

        Returns:
            The new state, or None if the host has no current state (no-op)

        Raises:
            InvalidEventError: If the event is not declared in the active profile
            InvalidStateForEventError: If the event cannot fire from the current state
            UserHaltError: If the registered callback vetoed the transition
        """
        current = self._controller.current_state()
        if not current:
            logger.debug(f"Event {event!r} ignored: no current state")
            return None

        spec = self._controller.spec
        label = coerce_label(event)
        if label is None:
            raise InvalidEventError(repr(event), spec.profile)
        event = label
        table = spec.event_states_table.get(event)
        if table is None:
            raise InvalidEventError(event, spec.profile)

        if current not in table:
            raise InvalidStateForEventError(event, current)

        destination = table[current]
        if not destination:
            raise InvalidStateForEventError(
                event,
                current,
                f"New state transition from current state '{current}' "
                f"due to event '{event}' is empty",
            )

        registered = spec.event_callback_table.get(event)
        if registered is not None:
            before = self._info(TransitionPhase.BEFORE, event, current, destination)
            # Only an explicit False vetoes
            if registered(before) is False:
                logger.error(
                    f"Event '{event}' triggered but callback returned False. "
                    f"State not updated to '{destination}'"
                )
                raise UserHaltError(event, destination)

        self._controller.write(destination)
        logger.debug(
            f"Event '{event}' moved {type(self._host).__name__} "
            f"from '{current}' to '{destination}' "
            f"(profile '{spec.profile}')"
        )

        after = self._info(TransitionPhase.AFTER, event, current, destination)
        if registered is not None:
            registered(after)
        if callback is not None:
            callback(after)

        return destination

    def current_state_meaning(self) -> Optional[Label]:
        """Meaning assigned to the current state, or None."""
        current = self._controller.current_state()
        if not current:
            return None
        return self._controller.spec.state_meaning_table.get(current)

    def states_of_meaning(self, meaning: Any) -> List[Label]:
        return list(
            self._controller.spec.meaning_states_table.get(coerce_label(meaning), ())
        )

    def all_states(self) -> List[Label]:
        return list(self._controller.spec.profile_state_list)

    def _info(
        self, phase: TransitionPhase, event: Label, from_state: Label, to_state: Label
    ) -> TransitionInfo:
        return TransitionInfo(
            phase=phase,
            event=event,
            from_state=from_state,
            to_state=to_state,
            host=self._host,
            profile=self._controller.active_profile,
        )
