"""
Declaration-time API for state profiles.

``stateful()`` opens a profile and returns a ``ProfileBuilder``. The builder's
directives (``event`` and ``state_meaning``) only ever mutate that builder;
``build()`` freezes it into an immutable ``Spec``.

Example::

    class Ticket(Stateful):
        lifecycle = stateful(initial_state="open")
        lifecycle.event("close", {"open": "closed"})
        lifecycle.event("reopen", {"closed": "open"})
"""

import logging
from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ...utils.config_types import StatefulOptions
from ..errors import ConfigurationError
from .errors import DuplicateMeaningError
from .labels import Label, normalize_label
from .protocols import TransitionCallback
from .spec import Spec

logger = logging.getLogger(__name__)


class ProfileBuilder:
    """
    Mutable builder for one state profile.

    The builder records every directive into plain dicts and lists. Once
    ``build()`` has been called it is sealed, and any further directive raises
    ``ConfigurationError``.
    """

    def __init__(self, options: StatefulOptions):
        self._options = options
        self._transitions: Dict[Label, List[Label]] = {}
        self._state_events: Dict[Label, List[Label]] = {}
        self._event_states: Dict[Label, Dict[Label, Label]] = {}
        self._callbacks: Dict[Label, TransitionCallback] = {}
        self._states: List[Label] = []
        self._state_meanings: Dict[Label, Label] = {}
        self._meaning_states: Dict[Label, List[Label]] = {}
        self._spec: Optional[Spec] = None

    @property
    def profile(self) -> Label:
        return self._options.profile

    @property
    def options(self) -> StatefulOptions:
        return self._options

    @property
    def is_built(self) -> bool:
        return self._spec is not None

    def __enter__(self) -> "ProfileBuilder":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None

    def __repr__(self) -> str:
        return (
            f"ProfileBuilder(profile={self.profile!r}, "
            f"states={self._states!r}, events={list(self._event_states)!r})"
        )

    def event(
        self,
        name: Any,
        transitions: Mapping[Any, Any],
        callback: Optional[TransitionCallback] = None,
    ) -> "ProfileBuilder":
        """
        Register an event.

        Args:
            name: The event name
            transitions: Non-empty mapping of source state to destination state
            callback: Optional callable invoked before and after the transition

        Returns:
            The builder, for chaining

        Raises:
            ConfigurationError: If the builder is sealed, the mapping is empty
                or not a mapping, or the callback is not callable
        """
        self._ensure_open()
        event = self._label(name, "event name")

        if not isinstance(transitions, MappingABC) or not transitions:
            raise ConfigurationError(
                f"Event '{event}' needs a non-empty mapping "
                "of source to destination states",
                context={"profile": self.profile, "event": event},
            )
        if callback is not None and not callable(callback):
            raise ConfigurationError(
                f"Callback for event '{event}' is not callable",
                context={"profile": self.profile, "event": event},
            )

        for raw_from, raw_to in transitions.items():
            from_state = self._label(raw_from, "state")
            to_state = self._label(raw_to, "state")

            # Keep possible next states; the same pair may come from different events
            next_states = self._transitions.setdefault(from_state, [])
            if to_state not in next_states:
                next_states.append(to_state)

            self._state_events.setdefault(from_state, []).append(event)

            event_states = self._event_states.setdefault(event, {})
            previous = event_states.get(from_state)
            if previous is not None and previous != to_state:
                logger.warning(
                    f"Event '{event}' from '{from_state}' in profile '{self.profile}' "
                    f"redirected from '{previous}' to '{to_state}'"
                )
            event_states[from_state] = to_state

            self._add_state(from_state)
            self._add_state(to_state)

        if callback is not None:
            self._callbacks[event] = callback

        logger.debug(
            f"Registered event '{event}' on profile '{self.profile}': "
            f"{dict(self._event_states[event])}"
        )
        return self

    def state_meaning(self, mapping: Mapping[Any, Any]) -> "ProfileBuilder":
        """
        Tag states with a meaning.

        Raises:
            DuplicateMeaningError: If a state already carries a meaning
        """
        self._ensure_open()
        for raw_state, raw_meaning in mapping.items():
            state = self._label(raw_state, "state")
            meaning = self._label(raw_meaning, "meaning")

            existing = self._state_meanings.get(state)
            if existing is not None:
                raise DuplicateMeaningError(state, existing, meaning, self.profile)

            self._state_meanings[state] = meaning
            states = self._meaning_states.setdefault(meaning, [])
            if state not in states:
                states.append(state)

        return self

    def build(self) -> Spec:
        """Freeze the builder into a Spec. Calling it again returns the same Spec."""
        if self._spec is None:
            self._spec = Spec(
                profile=self._options.profile,
                initial_state=self._options.initial_state,
                state_attribute_name=self._options.state_attr_name,
                transition_table=_freeze(self._transitions),
                state_events_table=_freeze(self._state_events),
                event_states_table=MappingProxyType(
                    {
                        k: MappingProxyType(dict(v))
                        for k, v in self._event_states.items()
                    }
                ),
                event_callback_table=MappingProxyType(dict(self._callbacks)),
                profile_state_list=tuple(self._states),
                state_meaning_table=MappingProxyType(dict(self._state_meanings)),
                meaning_states_table=_freeze(self._meaning_states),
            )
            logger.debug(
                f"Built state profile '{self.profile}' with {len(self._states)} states "
                f"and {len(self._event_states)} events"
            )
        return self._spec

    def _add_state(self, state: Label) -> None:
        if state not in self._states:
            self._states.append(state)

    def _ensure_open(self) -> None:
        if self._spec is not None:
            raise ConfigurationError(
                f"State profile '{self.profile}' is already built "
                "and can no longer change",
                context={"profile": self.profile},
            )

    def _label(self, value: Any, kind: str) -> Label:
        try:
            label = normalize_label(value)
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid {kind} {value!r}",
                context={"profile": self.profile},
                original_exception=e,
            ) from e
        if not label:
            raise ConfigurationError(
                f"Empty {kind} in profile '{self.profile}'",
                context={"profile": self.profile},
            )
        return label


def _freeze(table: Dict[Label, List[Label]]) -> Mapping[Label, tuple]:
    return MappingProxyType({k: tuple(v) for k, v in table.items()})


def stateful(
    options: Any = None,
    block: Optional[Callable[[ProfileBuilder], None]] = None,
    **overrides: Any,
) -> ProfileBuilder:
    """
    Open a state profile.

    Args:
        options: Mapping (or StatefulOptions) with ``profile``, ``initial_state``
            and ``state_attr_name``. Unknown keys are ignored; anything that is
            not a mapping falls back to the defaults.
        block: Optional declaration block, called with the new builder.
        **overrides: Option keys given as keywords; they win over ``options``.

    Returns:
        A ProfileBuilder for the profile

    Raises:
        ConfigurationError: If an option value is invalid
    """
    if isinstance(options, StatefulOptions):
        values: Dict[str, Any] = options.model_dump()
    elif isinstance(options, MappingABC):
        values = dict(options)
    else:
        values = {}
    values.update(overrides)

    try:
        parsed = StatefulOptions(**{str(k): v for k, v in values.items()})
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid stateful options",
            context={"options": sorted(str(k) for k in values)},
            original_exception=e,
        ) from e

    builder = ProfileBuilder(parsed)
    if block is not None:
        block(builder)
    return builder
