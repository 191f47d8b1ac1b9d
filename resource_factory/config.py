import os
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union, cast

from .naming import NameStyle, to_name_style

ENV_INFLECT_KEYS = "RESOURCE_FACTORY_INFLECT_KEYS"


class Unknown(Enum):
    SKIP = 'skip'
    FORBID = 'forbid'


class Config:
    """
    Settings used when a resource schema is finalized.

    Every setting left as `None` is taken from the next layer,
    see `merge_config`. In case of inheriting you can set any setting as a class field.
    """

    def __init__(
        self,
        inflect: Union[NameStyle, str, None] = None,
        omit_default: Optional[bool] = None,
        unknown: Optional[Unknown] = None,
        trim_trailing_underscore: Optional[bool] = None,
    ):
        if inflect is not None or not hasattr(self, "inflect"):
            self.inflect = None if inflect is None else to_name_style(inflect)
        if omit_default is not None or not hasattr(self, "omit_default"):
            self.omit_default = omit_default
        if unknown is not None or not hasattr(self, "unknown"):
            self.unknown = unknown
        if trim_trailing_underscore is not None or not hasattr(self, "trim_trailing_underscore"):
            self.trim_trailing_underscore = trim_trailing_underscore

    def __repr__(self):
        settings = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if v is not None)
        return f"{type(self).__name__}({settings})"


CONFIG_FIELDS = {
    "inflect",
    "omit_default",
    "unknown",
    "trim_trailing_underscore",
}

DEFAULT_CONFIG = Config(
    inflect=NameStyle.none,
    omit_default=True,
    unknown=Unknown.SKIP,
    trim_trailing_underscore=False,
)

_CP_OWN_ATTRS = ("_configs",)


class ConfigProxy:
    __slots__ = _CP_OWN_ATTRS

    def __init__(self, *configs: Config):
        self._configs = configs

    def __getattr__(self, item):
        for config in self._configs:
            res = getattr(config, item, None)
            if res is not None:
                return res

        if item in CONFIG_FIELDS:
            return None

        raise AttributeError(f"Field `{item}` is not defined for Config")

    def __setattr__(self, key, value):
        if key in _CP_OWN_ATTRS:
            return super().__setattr__(key, value)
        raise AttributeError("Merged config is read-only")


def merge_config(*configs: Optional[Config]) -> Config:
    return cast(Config, ConfigProxy(*[c for c in configs if c]))


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> Config:
    if environ is None:
        environ = os.environ
    inflect = environ.get(ENV_INFLECT_KEYS) or None
    return Config(inflect=inflect)


_process_config = config_from_env()


def get_process_config() -> Config:
    return _process_config


def configure(**settings: Any) -> Config:
    """
    Replace process-wide defaults. Only resources declared afterwards are affected.
    Returns the previous process config, so it can be restored with `set_process_config`
    """
    unknown_settings = set(settings) - CONFIG_FIELDS
    if unknown_settings:
        raise TypeError(f"Unknown config settings: {sorted(unknown_settings)}")
    current: Dict[str, Any] = {
        name: getattr(_process_config, name) for name in CONFIG_FIELDS
    }
    current.update(settings)
    return set_process_config(Config(**current))


def set_process_config(config: Config) -> Config:
    global _process_config
    previous = _process_config
    _process_config = config
    return previous
