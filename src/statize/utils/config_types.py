# This file defines the structure of configuration objects using Pydantic.
# It is kept apart from the state machine modules to avoid circular imports.

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.state_machine.labels import DEFAULT_PROFILE, normalize_label


class StatefulOptions(BaseModel):
    """Options accepted by ``stateful()`` when opening a state profile."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    profile: str = DEFAULT_PROFILE
    initial_state: str = "open"
    state_attr_name: str = "state"

    @field_validator("profile", "initial_state", "state_attr_name", mode="before")
    @classmethod
    def normalize_labels(cls, v: Any) -> str:
        """Accept enum members wherever a label is expected."""
        try:
            label = normalize_label(v)
        except TypeError as e:
            raise ValueError(str(e)) from e
        if not label:
            raise ValueError("labels must not be empty")
        return label

    @field_validator("state_attr_name")
    @classmethod
    def validate_attr_name(cls, v: str) -> str:
        """The state attribute must be usable with getattr/setattr."""
        if not v.isidentifier():
            raise ValueError(f"state_attr_name must be a valid identifier, got '{v}'")
        return v


# --- Main Settings Model ---
class Settings(BaseModel):
    """Runtime settings for statize logging."""

    log_level: str = "INFO"
    debug: bool = False
    structured_logging: bool = False
    log_file: Optional[Path] = None
    module_levels: dict = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a known logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{v}'")
        return level
