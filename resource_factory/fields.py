from dataclasses import dataclass, field as dc_field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from .exceptions import DeclarationError
from .type_tags import TypeTag

MUTABLE_DEFAULT_TYPES = (list, dict, set)


class Field:
    """
    Marker of a field declared in resource class body, see `field()`
    """
    __slots__ = ("type", "default", "default_factory", "options")

    def __init__(self, type_: Any, default: Any, default_factory: Optional[Callable[[], Any]], options: dict):
        self.type = type_
        self.default = default
        self.default_factory = default_factory
        self.options = options

    def __repr__(self):
        return f"field({self.type!r}, default={self.default!r})"


def field(
    type_: Any = str,
    *,
    default: Any = None,
    default_factory: Optional[Callable[[], Any]] = None,
    **options: Any,
) -> Any:
    """
    Declare a resource field.

    :param type_: declared type: primitive, resource class, `List[...]` of them
                  or a string with forward reference
    :param default: value used when field is absent in deserialized data.
                    Fields equal to default are omitted when serializing
    :param default_factory: zero-argument callable producing default value,
                            called for every new instance
    :param options: any other per-field options, available as `FieldSpec.options`
    """
    return Field(type_, default, default_factory, options)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: TypeTag  # noqa A003
    annotation: Any
    default: Any = None
    default_factory: Optional[Callable[[], Any]] = None
    options: Mapping[str, Any] = dc_field(default_factory=lambda: MappingProxyType({}))

    def get_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


def check_default(name: str, default: Any, default_factory: Optional[Callable[[], Any]]) -> None:
    if default_factory is not None:
        if default is not None:
            raise DeclarationError(f"cannot specify both default and default_factory for field {name!r}")
        if not callable(default_factory):
            raise DeclarationError(f"default_factory of field {name!r} must be callable")
    elif isinstance(default, MUTABLE_DEFAULT_TYPES):
        raise DeclarationError(
            f"mutable default {type(default).__name__} for field {name!r} is not allowed:"
            f" use default_factory",
        )
