"""
Immutable per-profile state machine configuration.

A ``Spec`` is produced once by ``ProfileBuilder.build()`` and is never
mutated afterwards; every table is exposed through read-only mapping proxies
over tuples. A ``SpecRegistry`` holds the specs declared on one host type.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import UnknownProfileError
from .labels import DEFAULT_PROFILE, Label, normalize_label
from .protocols import TransitionCallback

_EMPTY: Mapping[Any, Any] = MappingProxyType({})


def _empty_table() -> Mapping[Any, Any]:
    return _EMPTY


@dataclass(frozen=True, eq=False)
class Spec:
    """Frozen configuration of a single state profile."""

    profile: Label = DEFAULT_PROFILE
    initial_state: Label = "open"
    state_attribute_name: str = "state"
    transition_table: Mapping[Label, Tuple[Label, ...]] = field(
        default_factory=_empty_table
    )
    state_events_table: Mapping[Label, Tuple[Label, ...]] = field(
        default_factory=_empty_table
    )
    event_states_table: Mapping[Label, Mapping[Label, Label]] = field(
        default_factory=_empty_table
    )
    event_callback_table: Mapping[Label, TransitionCallback] = field(
        default_factory=_empty_table
    )
    profile_state_list: Tuple[Label, ...] = ()
    state_meaning_table: Mapping[Label, Label] = field(default_factory=_empty_table)
    meaning_states_table: Mapping[Label, Tuple[Label, ...]] = field(
        default_factory=_empty_table
    )

    def next_states(self, state: Optional[Label]) -> Tuple[Label, ...]:
        """States reachable in one step from ``state``."""
        if not state:
            return ()
        return self.transition_table.get(state, ())

    def next_events(self, state: Optional[Label]) -> Tuple[Label, ...]:
        """Events registered with ``state`` as a source."""
        if not state:
            return ()
        return self.state_events_table.get(state, ())

    def describe(self) -> Dict[str, Any]:
        """Plain-dict snapshot of the spec, for diagnostics."""
        return {
            "profile": self.profile,
            "initial_state": self.initial_state,
            "state_attribute_name": self.state_attribute_name,
            "states": list(self.profile_state_list),
            "transitions": {k: list(v) for k, v in self.transition_table.items()},
            "events": {k: dict(v) for k, v in self.event_states_table.items()},
            "callbacks": sorted(self.event_callback_table),
            "meanings": dict(self.state_meaning_table),
        }


class SpecRegistry:
    """
    The specs declared on one host type, keyed by profile name.

    Registries are populated while the host class is being created and are
    only read afterwards.
    """

    def __init__(self, owner: str, specs: Iterable[Spec] = ()):
        self._owner = owner
        self._specs: Dict[Label, Spec] = {}
        for spec in specs:
            self._specs[spec.profile] = spec

    @property
    def owner(self) -> str:
        """Name of the host type this registry belongs to."""
        return self._owner

    def register(self, spec: Spec) -> None:
        """Add or replace the spec for ``spec.profile``."""
        self._specs[spec.profile] = spec

    def spec(self, profile: Any = DEFAULT_PROFILE) -> Spec:
        profile = normalize_label(profile)
        try:
            return self._specs[profile]
        except KeyError:
            raise UnknownProfileError(profile, self._owner) from None

    def __contains__(self, profile: object) -> bool:
        return profile in self._specs

    def known_profiles(self) -> List[Label]:
        return list(self._specs)

    def initial_state(self, profile: Any = DEFAULT_PROFILE) -> Label:
        return self.spec(profile).initial_state

    def state_attribute_name(self, profile: Any = DEFAULT_PROFILE) -> str:
        return self.spec(profile).state_attribute_name

    def transition_table(
        self, profile: Any = DEFAULT_PROFILE
    ) -> Mapping[Label, Tuple[Label, ...]]:
        return self.spec(profile).transition_table

    def state_events_table(
        self, profile: Any = DEFAULT_PROFILE
    ) -> Mapping[Label, Tuple[Label, ...]]:
        return self.spec(profile).state_events_table

    def event_states_table(
        self, profile: Any = DEFAULT_PROFILE
    ) -> Mapping[Label, Mapping[Label, Label]]:
        return self.spec(profile).event_states_table

    def event_callback_table(
        self, profile: Any = DEFAULT_PROFILE
    ) -> Mapping[Label, TransitionCallback]:
        return self.spec(profile).event_callback_table

    def profile_state_list(self, profile: Any = DEFAULT_PROFILE) -> Tuple[Label, ...]:
        return self.spec(profile).profile_state_list

    def state_meaning_table(
        self, profile: Any = DEFAULT_PROFILE
    ) -> Mapping[Label, Label]:
        return self.spec(profile).state_meaning_table

    def meaning_states_table(
        self, profile: Any = DEFAULT_PROFILE
    ) -> Mapping[Label, Tuple[Label, ...]]:
        return self.spec(profile).meaning_states_table
