"""
Stateful mixin.

Subclass ``Stateful`` and declare one or more profiles in the class body with
``stateful()``. The builders are collected and frozen into the class's
SpecRegistry when the class is created, and replaced by their Spec on the
class. Profiles declared on base classes are inherited; when two bases
declare the same profile, the one nearer in the MRO wins.

Example::

    class Ticket(Stateful):
        state = None

        lifecycle = stateful(initial_state="open")
        lifecycle.event("close", {"open": "closed"})
        lifecycle.event("reopen", {"closed": "open"})

        def __init__(self):
            self.init_state()

    ticket = Ticket()
    ticket.trigger_event("close")
    assert ticket.state == "closed"
"""

import inspect
import logging
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from ..errors import ConfigurationError
from .builder import ProfileBuilder
from .controller import AttributeStateHost, InstanceController
from .engine import TransitionEngine
from .labels import DEFAULT_PROFILE, Label
from .protocols import StateHost, TransitionCallback
from .spec import Spec, SpecRegistry

logger = logging.getLogger(__name__)


class Stateful:
    """
    Mixin giving instances declarative state machine behaviour.

    The only per-instance bookkeeping is the active profile name, kept in
    ``_statize_active_profile``; slotted subclasses must provide that slot.
    Instances therefore copy and pickle like any plain object.
    """

    _statize_registry: ClassVar[SpecRegistry] = SpecRegistry("Stateful")
    _statize_declared: ClassVar[Dict[Label, Spec]] = {}

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        declared: Dict[Label, Spec] = {}
        for name, builder in _profile_builders(cls):
            if builder.profile in declared:
                logger.warning(
                    f"{cls.__qualname__}.{name} redeclares state profile "
                    f"'{builder.profile}'; the later declaration wins"
                )
            spec = builder.build()
            declared[spec.profile] = spec
            setattr(cls, name, spec)
        cls._statize_declared = declared

        # Later bases in the MRO are merged first, so nearer classes win
        registry = SpecRegistry(cls.__qualname__)
        for base in reversed(cls.__mro__):
            if "_statize_declared" in vars(base):
                specs = vars(base)["_statize_declared"].values()
            else:
                specs = [builder.build() for _, builder in _profile_builders(base)]
            for spec in specs:
                registry.register(spec)
        cls._statize_registry = registry
        _check_state_attributes(cls, registry)

    @classmethod
    def state_registry(cls) -> SpecRegistry:
        """The SpecRegistry holding every profile declared on this type."""
        return cls._statize_registry

    def state_host(self) -> StateHost:
        """
        The StateHost used to read and write the current state.

        Override to store state somewhere other than plain attributes.
        """
        return AttributeStateHost(self)

    def _state_controller(self) -> InstanceController:
        return InstanceController(
            type(self)._statize_registry,
            self.state_host(),
            getattr(self, "_statize_active_profile", None),
        )

    def _state_engine(self) -> TransitionEngine:
        return TransitionEngine(self._state_controller(), self)

    # Instance controller

    def init_state(self, profile: Any = DEFAULT_PROFILE) -> Label:
        """Activate ``profile`` and set the state to its initial state."""
        controller = self._state_controller()
        self._statize_active_profile = controller.activate(profile)
        return controller.write_initial_state()

    def activate_state_profile(self, profile: Any) -> Label:
        """Switch the active profile without changing any stored state."""
        self._statize_active_profile = self._state_controller().activate(profile)
        return self._statize_active_profile

    def active_state_profile(self) -> Label:
        return self._state_controller().active_profile

    def current_state(self) -> Optional[Label]:
        return self._state_controller().current_state()

    def at_initial_state(self) -> bool:
        controller = self._state_controller()
        return controller.current_state() == controller.spec.initial_state

    def state_profiles(self) -> List[Label]:
        return type(self)._statize_registry.known_profiles()

    # Transition engine

    def next_states(self) -> List[Label]:
        return self._state_engine().next_states()

    def next_events(self) -> List[Label]:
        return self._state_engine().next_events()

    def apply_state(self, state: Any) -> bool:
        return self._state_engine().apply_state(state)

    def apply_state_strict(self, state: Any) -> None:
        self._state_engine().apply_state_strict(state)

    def can_trigger(self, event: Any) -> bool:
        return self._state_engine().can_trigger(event)

    def trigger_event(
        self, event: Any, callback: Optional[TransitionCallback] = None
    ) -> Optional[Label]:
        return self._state_engine().trigger_event(event, callback)

    def current_state_meaning(self) -> Optional[Label]:
        return self._state_engine().current_state_meaning()

    def states_of_meaning(self, meaning: Any) -> List[Label]:
        return self._state_engine().states_of_meaning(meaning)

    def all_states(self) -> List[Label]:
        return self._state_engine().all_states()


def _profile_builders(cls: type) -> List[Tuple[str, ProfileBuilder]]:
    return [
        (name, value)
        for name, value in list(vars(cls).items())
        if isinstance(value, ProfileBuilder)
    ]


def _check_state_attributes(cls: type, registry: SpecRegistry) -> None:
    """Reject a profile whose state attribute would resolve to a declaration."""
    for profile in registry.known_profiles():
        name = registry.state_attribute_name(profile)
        if isinstance(inspect.getattr_static(cls, name, None), (ProfileBuilder, Spec)):
            raise ConfigurationError(
                f"{cls.__qualname__}.{name} holds a state profile declaration "
                f"but is also the state attribute of profile '{profile}'",
                context={
                    "owner": cls.__qualname__,
                    "attribute": name,
                    "profile": profile,
                },
            )
