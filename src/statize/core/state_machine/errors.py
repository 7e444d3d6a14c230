"""
Error classes for the state machine module.
"""

from typing import Optional

from ..errors import ConfigurationError, StatizeError


class DuplicateMeaningError(ConfigurationError):
    """Error when a state is assigned a second meaning within a profile."""

    def __init__(self, state: str, existing_meaning: str, meaning: str, profile: str):
        self.state = state
        self.existing_meaning = existing_meaning
        self.meaning = meaning
        super().__init__(
            f"State '{state}' already has meaning '{existing_meaning}'",
            context={"profile": profile, "state": state, "meaning": meaning},
            error_code="CONFIG_002",
        )


class UnknownProfileError(ConfigurationError):
    """Error when a profile that was never declared is referenced."""

    def __init__(self, profile: str, owner: Optional[str] = None):
        self.profile = profile
        context = {"profile": profile}
        if owner:
            context["owner"] = owner
        super().__init__(
            f"State profile '{profile}' is not declared",
            context=context,
            error_code="CONFIG_003",
        )


class ProfileNotActiveError(StatizeError):
    """Error when an instance is used before any profile was activated."""

    def __init__(self, owner: str):
        super().__init__(
            f"No state profile is active on this {owner} instance; "
            "call init_state() or activate_state_profile() first",
            error_code="STATE_000",
            context={"owner": owner},
        )


class TransitionError(StatizeError):
    """Error related to transition operations."""

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: str = "TRANSITION_000",
        **context,
    ):
        super().__init__(
            message or "Error in transition operation",
            error_code=error_code,
            context=context,
        )


class InvalidEventError(TransitionError):
    """Error when an event is not registered under the active profile."""

    def __init__(self, event: str, profile: str):
        self.event = event
        self.profile = profile
        super().__init__(
            f"Event '{event}' not registered under profile '{profile}'",
            error_code="TRANSITION_001",
            event=event,
            profile=profile,
        )


class InvalidStateForEventError(TransitionError):
    """Error when an event cannot fire from the current state."""

    def __init__(self, event: str, state: str, message: Optional[str] = None):
        self.event = event
        self.state = state
        super().__init__(
            message or f"Current state '{state}' is not registered to event '{event}'",
            error_code="TRANSITION_002",
            event=event,
            state=state,
        )


class InvalidStateError(TransitionError):
    """Error when a direct jump targets a state that is not reachable."""

    def __init__(self, state: str, current_state: Optional[str]):
        self.state = state
        self.current_state = current_state
        super().__init__(
            f"Given new state '{state}' is not valid",
            error_code="TRANSITION_003",
            state=state,
            current_state=current_state,
        )


class UserHaltError(TransitionError):
    """Error when a before-callback vetoes a transition."""

    def __init__(self, event: str, target_state: str):
        self.event = event
        self.target_state = target_state
        super().__init__(
            f"Event '{event}' triggered but callback returned False. "
            f"State not updated to '{target_state}'",
            error_code="TRANSITION_004",
            event=event,
            target_state=target_state,
        )
