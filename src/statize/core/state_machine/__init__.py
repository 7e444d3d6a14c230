"""
State Machine package for statize.

This package provides the declarative state machine engine: profile
builders, immutable specs, the per-instance controller and the transition
engine, tied together by the Stateful mixin.
"""

from .base import Stateful
from .builder import ProfileBuilder, stateful
from .controller import AttributeStateHost, InstanceController
from .engine import TransitionEngine
from .errors import (
    DuplicateMeaningError,
    InvalidEventError,
    InvalidStateError,
    InvalidStateForEventError,
    ProfileNotActiveError,
    TransitionError,
    UnknownProfileError,
    UserHaltError,
)
from .labels import DEFAULT_PROFILE, Label, normalize_label
from .protocols import StateHost, TransitionCallback, TransitionInfo, TransitionPhase
from .spec import Spec, SpecRegistry

__all__ = [
    # Protocols
    "StateHost",
    "TransitionCallback",
    "TransitionInfo",
    "TransitionPhase",
    # Declaration
    "ProfileBuilder",
    "Spec",
    "SpecRegistry",
    "stateful",
    # Runtime
    "AttributeStateHost",
    "InstanceController",
    "Stateful",
    "TransitionEngine",
    # Labels
    "DEFAULT_PROFILE",
    "Label",
    "normalize_label",
    # Errors
    "DuplicateMeaningError",
    "InvalidEventError",
    "InvalidStateError",
    "InvalidStateForEventError",
    "ProfileNotActiveError",
    "TransitionError",
    "UnknownProfileError",
    "UserHaltError",
]
