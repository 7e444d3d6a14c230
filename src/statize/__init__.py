"""statize - declarative finite-state-machine behaviour for any Python object.

A host type declares one or more named state profiles. Each profile lists the
events that move an instance between states, optional meanings grouping those
states, and optional callbacks that run around a transition and may veto it.

Example:
    >>> from statize import Stateful, stateful
    >>> class Door(Stateful):
    ...     state = None
    ...     machine = stateful(initial_state="open")
    ...     machine.event("close", {"open": "closed"})
    >>> door = Door()
    >>> door.init_state()
    'open'
    >>> door.trigger_event("close")
    'closed'

Attributes:
    __version__ (str): The version of the statize package.
    Stateful (type): Mixin giving instances state machine behaviour.
    stateful (Callable): Opens a state profile declaration.
    Settings (type): Logging settings.
    load_settings (Callable): Function to load settings.
"""

from .__version__ import __version__
from .core.errors import ConfigurationError, StatizeError
from .core.state_machine import (
    DuplicateMeaningError,
    InvalidEventError,
    InvalidStateError,
    InvalidStateForEventError,
    ProfileBuilder,
    ProfileNotActiveError,
    Spec,
    SpecRegistry,
    Stateful,
    StateHost,
    TransitionError,
    TransitionInfo,
    TransitionPhase,
    UnknownProfileError,
    UserHaltError,
    stateful,
)
from .utils.config_types import StatefulOptions
from .utils.logging_config import configure_logging
from .utils.settings import Settings, load_settings

__all__ = [
    "Stateful",
    "stateful",
    "ProfileBuilder",
    "Spec",
    "SpecRegistry",
    "StateHost",
    "StatefulOptions",
    "TransitionInfo",
    "TransitionPhase",
    "StatizeError",
    "ConfigurationError",
    "DuplicateMeaningError",
    "UnknownProfileError",
    "ProfileNotActiveError",
    "TransitionError",
    "InvalidEventError",
    "InvalidStateForEventError",
    "InvalidStateError",
    "UserHaltError",
    "Settings",
    "load_settings",
    "configure_logging",
    "__version__",
]
