import logging
import sys
from collections import abc
from dataclasses import dataclass
from typing import (
    Any, Dict, ForwardRef, FrozenSet, List, Mapping, Optional, Sequence, Set, Tuple, Union,
    get_args, get_origin,
)

try:
    from types import UnionType  # type: ignore
except ImportError:
    UnionType = None  # type: ignore

logger = logging.getLogger(__name__)

# origin of generic alias -> collection built by parser
COLLECTION_FACTORIES = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
    abc.Sequence: list,
    abc.MutableSequence: list,
    abc.Collection: list,
    abc.Iterable: list,
    abc.Set: set,
    abc.MutableSet: set,
}

DICT_ORIGINS = (dict, abc.Mapping, abc.MutableMapping)

UNRESOLVED_ERRORS = (NameError, AttributeError, SyntaxError, TypeError)

TYPING_NAMES = {
    "Any": Any,
    "Dict": Dict,
    "List": List,
    "Mapping": Mapping,
    "Optional": Optional,
    "Sequence": Sequence,
    "Tuple": Tuple,
    "Set": Set,
    "FrozenSet": FrozenSet,
    "Union": Union,
}

# module name -> resource name -> resource class
_declared_resources: Dict[str, Dict[str, type]] = {}


def is_resource(type_: Any) -> bool:
    return isinstance(type_, type) and getattr(type_, "__resource_schema__", None) is not None


def register_resource(resource: type) -> None:
    _declared_resources.setdefault(resource.__module__, {})[resource.__name__] = resource


class TypeTag:
    __slots__ = ()


@dataclass(frozen=True)
class Primitive(TypeTag):
    type: Any  # noqa A003

    @property
    def name(self) -> str:
        return getattr(self.type, "__name__", None) or str(self.type)


@dataclass(frozen=True)
class Nested(TypeTag):
    resource: type


@dataclass(frozen=True)
class ListOf(TypeTag):
    item: TypeTag
    collection: type = list


@dataclass(frozen=True)
class DictOf(TypeTag):
    """Mapping with keys passed as is and values of `value` tag"""
    value: TypeTag


class Lazy(TypeTag):
    """
    Forward reference to a type which could be declared later.

    Expression is evaluated on first use against globals of declaring module
    and resources declared in it. Unresolvable reference behaves like an opaque type
    """
    __slots__ = ("expr", "module", "_resolved")

    def __init__(self, expr: str, module: Optional[str]):
        self.expr = expr
        self.module = module
        self._resolved: Optional[TypeTag] = None

    @property
    def is_resolved(self) -> bool:
        return self._resolved is not None

    def resolve(self) -> TypeTag:
        if self._resolved is not None:
            return self._resolved
        module = sys.modules.get(self.module) if self.module else None
        globalns = dict(vars(module)) if module is not None else {}
        localns = {**TYPING_NAMES, **_declared_resources.get(self.module, {})}
        try:
            type_ = eval(self.expr, globalns, localns)  # noqa S307
        except UNRESOLVED_ERRORS as e:
            logger.warning("Cannot resolve type %r declared in %s: %r", self.expr, self.module, e)
            return Primitive(Any)
        self._resolved = resolve_tag(make_type_tag(type_, self.module))
        return self._resolved

    def __repr__(self):
        return f"Lazy({self.expr!r}, {self.module!r})"


def resolve_tag(tag: TypeTag) -> TypeTag:
    while isinstance(tag, Lazy):
        tag = tag.resolve()
    return tag


def is_optional(type_: Any) -> bool:
    origin = get_origin(type_)
    if origin is not Union and (UnionType is None or origin is not UnionType):
        return False
    args = get_args(type_)
    return type(None) in args and len(args) == 2


def make_type_tag(type_: Any, module: Optional[str] = None) -> TypeTag:
    if isinstance(type_, TypeTag):
        return type_
    if isinstance(type_, str):
        return Lazy(type_, module)
    if isinstance(type_, ForwardRef):
        return Lazy(type_.__forward_arg__, module)
    if is_resource(type_):
        return Nested(type_)
    if is_optional(type_):
        inner = next(arg for arg in get_args(type_) if arg is not type(None))
        return make_type_tag(inner, module)

    origin = get_origin(type_)
    args = get_args(type_)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return ListOf(make_type_tag(args[0], module), tuple)
        return Primitive(type_)
    if origin in COLLECTION_FACTORIES and len(args) == 1:
        return ListOf(make_type_tag(args[0], module), COLLECTION_FACTORIES[origin])
    if origin in DICT_ORIGINS and len(args) == 2:
        return DictOf(make_type_tag(args[1], module))
    return Primitive(type_)
