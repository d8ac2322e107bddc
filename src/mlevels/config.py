"""
This module contains classes and functions related to
the configuration of mlevels (statistical settings).

Copyright © 2024 The mlevels authors.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pydantic
from ruamel import yaml
from ruamel.yaml.error import YAMLError

from mlevels.exception import ConfigError
from mlevels.types import PathType

DEFAULT_ALPHA = 0.05
DEFAULT_CALL_THRESHOLD = 0.5


class LevelsConfig(pydantic.BaseModel):
    """Settings used to call sites as methylated or unmethylated.

    :ivar alpha: the two-sided significance level of the Wilson interval
    :ivar call_threshold: a site is called methylated when the lower bound of
        its interval is above this value, and unmethylated when the upper
        bound is below it
    """

    model_config = pydantic.ConfigDict(frozen=True, extra="forbid")

    alpha: float = pydantic.Field(
        DEFAULT_ALPHA,
        gt=0.0,
        lt=1.0,
        description="The two-sided significance level of the confidence interval.",
    )

    call_threshold: float = pydantic.Field(
        DEFAULT_CALL_THRESHOLD,
        gt=0.0,
        lt=1.0,
        description="The methylation level that a confidence interval must exclude to call a site.",
    )

    def with_overrides(self, alpha: Optional[float] = None) -> LevelsConfig:
        """Return a copy of this config with the given values replaced.

        :param alpha: a new significance level, ignored if None
        :raises ConfigError: if the resulting config is invalid
        """
        data = self.model_dump()
        if alpha is not None:
            data["alpha"] = alpha
        return _validate(data)


def _validate(data: Any) -> LevelsConfig:
    try:
        return LevelsConfig.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_yaml_file(path: PathType) -> Any:
    """
    Load an arbitrary yaml file.

    :param path: path to the yaml file
    :raises FileExistsError: If the path does not exist
    :raises TypeError: If the path is not a yaml file
    :returns: a yaml object
    """
    path = Path(path)
    if not path.is_file():
        raise FileExistsError(f"{path} is not a file")

    if path.suffix not in (".yaml", ".yml"):
        raise TypeError(f"{path} is not a yaml file")

    yaml_loader = yaml.YAML(typ="safe")
    with open(path, "r") as cf:
        data = yaml_loader.load(cf)

    return data


def load_config(path: PathType) -> LevelsConfig:
    """Load a LevelsConfig from a yaml file.

    An empty file gives the default configuration.

    :param path: path to the yaml file
    :raises ConfigError: if the file cannot be read or holds invalid settings
    :returns LevelsConfig: the loaded configuration
    """
    try:
        data = load_yaml_file(path)
    except (FileExistsError, TypeError, YAMLError) as exc:
        raise ConfigError(str(exc)) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} does not contain a mapping of settings")

    return _validate(data)
