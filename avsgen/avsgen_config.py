"""Environment configuration, read from an optional YAML file."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import yaml

from avsgen.avsgen_errors import ConfigError

CONFIG_ENV_VAR = "AVSGEN_CONFIG"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AvsgenConfig:
    """Settings for an Environment."""
    autoload_dirs: Tuple[str, ...] = ()
    catalogs: Tuple[str, ...] = ()
    load_core: bool = True
    temp_dir: Optional[str] = None
    temp_prefix: str = "avsgen"
    log_level: str = "WARNING"
    log_json: bool = False


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_string_list(value) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


def validate_config(params: dict) -> list:
    """Validate a raw configuration mapping, returning one error per bad field."""
    errors = []
    known = {f.name for f in fields(AvsgenConfig)}

    for key in params:
        if key not in known:
            errors.append(ValidationError(field=key, message="Unknown setting",
                                          value=params[key]))

    for key in ("autoload_dirs", "catalogs"):
        if key in params and not _is_string_list(params[key]):
            errors.append(ValidationError(field=key, message="Must be a list of paths",
                                          value=params[key]))

    for key in ("load_core", "log_json"):
        if key in params and not isinstance(params[key], bool):
            errors.append(ValidationError(field=key, message="Must be a boolean",
                                          value=params[key]))

    if "temp_dir" in params:
        value = params["temp_dir"]
        if value is not None and not isinstance(value, str):
            errors.append(ValidationError(field="temp_dir", message="Must be a path or null",
                                          value=value))

    if "temp_prefix" in params:
        value = params["temp_prefix"]
        if not isinstance(value, str) or not value or os.sep in value:
            errors.append(ValidationError(field="temp_prefix",
                                          message="Must be a non-empty folder name",
                                          value=value))

    if "log_level" in params:
        value = params["log_level"]
        if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
            errors.append(ValidationError(field="log_level",
                                          message=f"Must be one of {', '.join(_LOG_LEVELS)}",
                                          value=value))

    return errors


def config_from_mapping(params: Optional[dict]) -> AvsgenConfig:
    params = dict(params or {})
    errors = validate_config(params)
    if errors:
        message = "; ".join(f"{e.field}: {e.message}" for e in errors)
        raise ConfigError(f"invalid configuration ({message})",
                          context={"errors": [e.field for e in errors]})
    for key in ("autoload_dirs", "catalogs"):
        if key in params:
            params[key] = tuple(params[key])
    if "log_level" in params:
        params["log_level"] = params["log_level"].upper()
    return AvsgenConfig(**params)


def load_config(path: Union[str, Path, None] = None) -> AvsgenConfig:
    """
    Load configuration from a YAML file.

    The file is ``path`` if given, else the one named by $AVSGEN_CONFIG.
    With neither, the defaults are returned.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return AvsgenConfig()

    try:
        with open(path, encoding="utf-8") as f:
            params = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}", context={"path": str(path)}) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"bad YAML in config file {path}", context={"path": str(path)}) from e

    if params is None:
        params = {}
    if not isinstance(params, dict):
        raise ConfigError(f"config file {path} must hold a mapping", context={"path": str(path)})
    return config_from_mapping(params)
