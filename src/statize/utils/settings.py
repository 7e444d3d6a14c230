import logging
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from ..core.errors import ConfigurationError
from .config_types import Settings

logger = logging.getLogger(__name__)

ENV_PREFIX = "STATIZE_"


def _load_from_env(
    environ: Mapping[str, str], env_prefix: str = ENV_PREFIX
) -> Dict[str, Any]:
    """Collect STATIZE_* variables that name a Settings field."""
    env_config: Dict[str, Any] = {}
    model_fields = Settings.model_fields

    for env_var, value in environ.items():
        if not env_var.startswith(env_prefix):
            continue

        key = env_var[len(env_prefix) :].lower()
        if key not in model_fields:
            logger.debug(f"Ignoring unknown settings variable: {env_var}")
            continue
        env_config[key] = value

    return env_config


def load_settings(
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    debug: bool = False,
) -> Settings:
    """
    Build a Settings object from the environment and explicit overrides.

    Precedence, lowest to highest: model defaults, ``STATIZE_*`` environment
    variables, ``overrides``. Pydantic handles string-to-type coercion for
    values read from the environment.

    Args:
        overrides: Values that take precedence over the environment.
        environ: Environment mapping to read, defaults to os.environ.
        debug: If True, forces the DEBUG log level.

    Returns:
        A populated Settings object.

    Raises:
        ConfigurationError: If the combined values fail validation.
    """
    config = _load_from_env(os.environ if environ is None else environ)
    config.update(overrides or {})
    if debug:
        config["debug"] = True
        config["log_level"] = "DEBUG"

    try:
        return Settings(**config)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid statize settings",
            context={"keys": sorted(config)},
            original_exception=e,
        ) from e
