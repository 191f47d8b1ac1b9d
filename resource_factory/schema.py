import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type, TypeVar, Union

from .config import DEFAULT_CONFIG, Config, Unknown, get_process_config, merge_config
from .exceptions import DeclarationError, DuplicateFieldError, FrozenSchemaError
from .fields import FieldSpec, check_default
from .naming import NameStyle, convert_name, to_name_style
from .type_tags import TypeTag, make_type_tag

logger = logging.getLogger(__name__)

T = TypeVar("T")

InflectHook = Callable[[], Union[NameStyle, str, None]]


@dataclass(frozen=True, eq=False)
class ResourceSchema:
    """
    Immutable table of resource fields and key naming rules.
    Built once by `SchemaBuilder.finalize` and shared by all instances
    """
    name: str
    fields: Tuple[FieldSpec, ...]
    inflect: NameStyle
    omit_default: bool = True
    unknown: Unknown = Unknown.SKIP
    trim_trailing_underscore: bool = False
    _by_name: Mapping[str, FieldSpec] = field(init=False, repr=False)
    _data_names: Mapping[str, str] = field(init=False, repr=False)

    def __post_init__(self):
        by_name = {f.name: f for f in self.fields}
        data_names = {
            f.name: convert_name(f.name, self.inflect, self.trim_trailing_underscore)
            for f in self.fields
        }
        seen: Dict[str, str] = {}
        for field_name, data_name in data_names.items():
            if data_name in seen:
                raise DeclarationError(
                    f"fields {seen[data_name]!r} and {field_name!r} of resource {self.name}"
                    f" are both mapped to key {data_name!r}",
                )
            seen[data_name] = field_name
        object.__setattr__(self, "_by_name", MappingProxyType(by_name))
        object.__setattr__(self, "_data_names", MappingProxyType(data_names))

    def field_names(self) -> Tuple[str, ...]:
        return tuple(self._by_name)

    def get_field(self, name: str) -> Optional[FieldSpec]:
        return self._by_name.get(name)

    def lookup_type(self, name: str) -> Optional[TypeTag]:
        spec = self._by_name.get(name)
        if spec is None:
            return None
        return spec.type

    def data_name(self, name: str) -> str:
        return self._data_names[name]

    def instantiate(self, cls: Type[T]) -> T:
        """Create instance of `cls` with every field set to its default"""
        instance = cls.__new__(cls)
        for spec in self.fields:
            setattr(instance, spec.name, spec.get_default())
        return instance


class SchemaBuilder:
    """
    Accumulates field declarations of a resource in declaration order.
    `finalize` freezes them into `ResourceSchema`, no changes are allowed afterwards
    """

    def __init__(self, name: str, module: Optional[str] = None):
        self.name = name
        self.module = module
        self._fields: Dict[str, FieldSpec] = {}
        self._schema: Optional[ResourceSchema] = None

    def _check_not_finalized(self):
        if self._schema is not None:
            raise FrozenSchemaError(f"schema of resource {self.name} is already finalized")

    def declare_field(
        self,
        name: str,
        type_: Any = str,
        *,
        default: Any = None,
        default_factory: Optional[Callable[[], Any]] = None,
        **options: Any,
    ) -> FieldSpec:
        self._check_not_finalized()
        if not isinstance(name, str) or not name.isidentifier():
            raise DeclarationError(f"field name must be an identifier, got {name!r}")
        if name in self._fields:
            raise DuplicateFieldError(name, self.name)
        check_default(name, default, default_factory)
        spec = FieldSpec(
            name=name,
            type=make_type_tag(type_, self.module),
            annotation=type_,
            default=default,
            default_factory=default_factory,
            options=MappingProxyType(dict(options)),
        )
        self._fields[name] = spec
        return spec

    def add_field_spec(self, spec: FieldSpec) -> FieldSpec:
        self._check_not_finalized()
        existing = self._fields.get(spec.name)
        if existing is spec:
            return spec
        if existing is not None:
            raise DuplicateFieldError(spec.name, self.name)
        self._fields[spec.name] = spec
        return spec

    def __contains__(self, name: str) -> bool:
        return name in self._fields

    def finalize(
        self,
        inflect: Union[NameStyle, str, None] = None,
        config: Optional[Config] = None,
        hook: Optional[InflectHook] = None,
    ) -> ResourceSchema:
        """
        Freeze accumulated fields.

        Inflect mode is taken from (in order of priority): `inflect` argument,
        `config.inflect`, result of `hook`, process-wide config, `NameStyle.none`
        """
        if self._schema is not None:
            return self._schema

        merged = merge_config(config, get_process_config(), DEFAULT_CONFIG)
        if inflect is None and config is not None:
            inflect = config.inflect
        if inflect is None and hook is not None:
            inflect = hook()
        if inflect is None:
            inflect = merged.inflect

        self._schema = ResourceSchema(
            name=self.name,
            fields=tuple(self._fields.values()),
            inflect=to_name_style(inflect),
            omit_default=merged.omit_default,
            unknown=merged.unknown,
            trim_trailing_underscore=merged.trim_trailing_underscore,
        )
        logger.debug(
            "Resource %s declared with %d fields, inflect mode %s",
            self.name, len(self._schema.fields), self._schema.inflect.value,
        )
        return self._schema
