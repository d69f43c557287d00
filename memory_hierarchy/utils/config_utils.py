import os
import yaml
from dataclasses import _MISSING_TYPE, Field
from enum import Enum
from typing import Any, Dict, List, TypeVar, _GenericAlias

from memory_hierarchy.base_model import ConfigError

import logging
logger = logging.getLogger(__name__)


class ConfigLoader(yaml.SafeLoader):
    # https://stackoverflow.com/questions/528281/how-can-i-include-a-yaml-file-inside-another
    def __init__(self, stream):
        self._root = os.path.split(stream.name)[0]
        super(ConfigLoader, self).__init__(stream)

    def include(self, node):
        filename = os.path.join(self._root, self.construct_scalar(node))
        with open(filename, "r") as f:
            ret = yaml.load(f, ConfigLoader)
        if ret is None:
            raise ConfigError("included file is empty? file: %s" % filename)
        return ret

    def eval(self, node):
        # only plain arithmetic, e.g. !eval 32*1024
        expr = self.construct_scalar(node)
        return eval(expr, {"__builtins__": {}}, {})


ConfigLoader.add_constructor("!include", ConfigLoader.include)
ConfigLoader.add_constructor("!eval", ConfigLoader.eval)


T = TypeVar("T")


def dict_to_dataclass(d: Dict[str, Any], cls: T) -> T:
    if not hasattr(cls, "__dataclass_fields__"):
        if isinstance(cls, _GenericAlias) and cls.__origin__ is list:
            cls: List
            inner_cls = cls.__args__[0]
            if not isinstance(d, list):
                raise ConfigError(f"expected a list for {cls}, got {d!r}")
            return [dict_to_dataclass(x, inner_cls) for x in d]
        if cls is int:
            # no coercion, the owning config's validate() rejects non-integers
            return d
        try:
            return cls(d)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid value {d!r} for {getattr(cls, '__name__', cls)}") from e

    if not isinstance(d, dict):
        raise ConfigError(f"expected a mapping for {cls.__name__}, got {d!r}")

    fields = cls.__dataclass_fields__
    unknown = set(d) - set(fields)
    if unknown:
        raise ConfigError(f"unknown fields for {cls.__name__}: {sorted(unknown)}")

    kwargs = {}
    for field_name, field_type in fields.items():
        if isinstance(field_type, Field):
            field_value = d.get(field_name)
            if field_value is not None:
                if field_type.type is None or type(field_value) == field_type.type:
                    kwargs[field_name] = field_value
                else:
                    kwargs[field_name] = dict_to_dataclass(field_value, field_type.type)
            else:
                if not isinstance(field_type.default_factory, _MISSING_TYPE):
                    kwargs[field_name] = field_type.default_factory()
                elif not isinstance(field_type.default, _MISSING_TYPE):
                    kwargs[field_name] = field_type.default
                else:
                    raise ConfigError(f"required {field_name} is not provided")
    return cls(**kwargs)


def load_config(config_path: str, cls: T) -> T:
    with open(config_path) as f:
        data = yaml.load(f, ConfigLoader)
    if data is None:
        raise ConfigError(f"config file is empty: {config_path}")
    return dict_to_dataclass(data, cls)


class BaseEnum(Enum):
    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            # numeric menu codes, in declaration order
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            return None
        return cls._missing_name(value)

    @classmethod
    def _missing_name(cls, value):
        if not isinstance(value, str):
            return None
        value = value.lower()
        for member in cls:
            if member.name.lower() == value:
                return member
        return None

    def __repr__(self):
        return self.name
