"""
Per-instance bookkeeping for stateful objects.

The controller tracks which profile is active on an instance and bridges
reads and writes of the current state to the host through the ``StateHost``
capability interface.
"""

import inspect
import logging
from enum import Enum
from typing import Any, Optional

from .errors import ProfileNotActiveError
from .labels import Label, normalize_label
from .protocols import StateHost
from .spec import Spec, SpecRegistry

logger = logging.getLogger(__name__)


class AttributeStateHost:
    """
    StateHost adapter over plain object attributes.

    A missing attribute, or one whose getter raises, reads as None and the
    error is logged. A read-only attribute (a property without a setter, or a
    name a slotted class cannot store) makes writes a no-op that reports False.
    """

    def __init__(self, target: Any):
        self._target = target

    def get_state(self, name: str) -> Optional[Label]:
        try:
            value = getattr(self._target, name, None)
        except Exception as e:
            logger.warning(
                f"Reading {type(self._target).__name__}.{name} failed, "
                f"treating state as unset: {e}"
            )
            return None
        if value is None:
            return None
        if isinstance(value, (str, Enum)):
            return normalize_label(value) or None
        return str(value)

    def set_state(self, name: str, value: str) -> bool:
        if not self._is_writable(name):
            logger.debug(
                f"{type(self._target).__name__}.{name} is read-only; "
                f"state '{value}' not written"
            )
            return False
        try:
            setattr(self._target, name, value)
        except AttributeError as e:
            logger.debug(
                f"Cannot write {type(self._target).__name__}.{name}: {e}"
            )
            return False
        return True

    def _is_writable(self, name: str) -> bool:
        descriptor = inspect.getattr_static(type(self._target), name, None)
        if isinstance(descriptor, property):
            return descriptor.fset is not None
        return True


class InstanceController:
    """
    Active profile pointer plus state access for one host instance.

    The controller is cheap to build; callers that outlive a single call keep
    only ``active_profile`` and pass it back in.
    """

    def __init__(
        self,
        registry: SpecRegistry,
        host: StateHost,
        active_profile: Optional[Label] = None,
    ):
        self._registry = registry
        self._host = host
        self._active_profile = active_profile

    @property
    def registry(self) -> SpecRegistry:
        return self._registry

    @property
    def active_profile(self) -> Label:
        """
        The active profile name.

        Raises:
            ProfileNotActiveError: If no profile has been activated yet
        """
        if self._active_profile is None:
            raise ProfileNotActiveError(self._registry.owner)
        return self._active_profile

    @property
    def spec(self) -> Spec:
        return self._registry.spec(self.active_profile)

    def activate(self, profile: Any) -> Label:
        """Make ``profile`` active without touching the stored state."""
        spec = self._registry.spec(profile)
        self._active_profile = spec.profile
        logger.debug(
            f"Activated state profile '{spec.profile}' on {self._registry.owner}"
        )
        return spec.profile

    def write_initial_state(self) -> Label:
        """Write the active profile's initial state unconditionally."""
        initial = self.spec.initial_state
        self.write(initial)
        return initial

    def current_state(self) -> Optional[Label]:
        return self._host.get_state(self.spec.state_attribute_name)

    def write(self, state: Label) -> bool:
        return self._host.set_state(self.spec.state_attribute_name, state)
