import sys
import types
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple, Union

from .config import Config, get_process_config
from .exceptions import DeclarationError, DuplicateFieldError
from .fields import Field, field
from .naming import NameStyle
from .schema import ResourceSchema, SchemaBuilder
from .type_tags import register_resource

RESERVED_NAMES = frozenset({"inflect", "default_inflect"})

FieldDefinition = Union[str, Tuple[str, Any], Tuple[str, Any, Dict[str, Any]]]


class FieldNamespace(dict):
    """
    Class body namespace collecting `field()` markers in declaration order
    """

    def __init__(self, resource_name: str):
        super().__init__()
        self.resource_name = resource_name
        self.fields: Dict[str, Field] = {}

    def __setitem__(self, key, value):
        if key in self.fields:
            raise DuplicateFieldError(key, self.resource_name)
        if isinstance(value, Field):
            if key in RESERVED_NAMES:
                raise DeclarationError(f"{key!r} cannot be used as a field name")
            self.fields[key] = value
            return
        super().__setitem__(key, value)


class ResourceMeta(type):
    @classmethod
    def __prepare__(mcs, name, bases, **kwargs):
        return FieldNamespace(name)

    def __new__(
        mcs,
        name,
        bases,
        namespace,
        inflect: Union[NameStyle, str, None] = None,
        config: Optional[Config] = None,
        **kwargs,
    ):
        if not any(isinstance(base, ResourceMeta) for base in bases):
            return super().__new__(mcs, name, bases, dict(namespace), **kwargs)

        # instance layouts of two resources with fields cannot be combined
        field_bases = [
            base.__name__ for base in bases
            if getattr(base, "__resource_schema__", None) is not None and base.__resource_schema__.fields
        ]
        if len(field_bases) > 1:
            raise DeclarationError(
                f"resource {name} cannot inherit fields from more than one resource: {', '.join(field_bases)}",
            )

        builder = SchemaBuilder(name, module=namespace.get("__module__"))
        for base in bases:
            base_schema = getattr(base, "__resource_schema__", None)
            if base_schema is None:
                continue
            for spec in base_schema.fields:
                builder.add_field_spec(spec)
            if inflect is None and config is None:
                # key naming is inherited from the first base resource
                inflect = base_schema.inflect

        for field_name, marker in namespace.fields.items():
            if field_name in builder:
                raise DuplicateFieldError(field_name, name)
            builder.declare_field(
                field_name,
                marker.type,
                default=marker.default,
                default_factory=marker.default_factory,
                **marker.options,
            )

        attrs = dict(namespace)
        attrs.setdefault("__slots__", tuple(namespace.fields))
        cls = super().__new__(mcs, name, bases, attrs, **kwargs)
        cls.__resource_schema__ = builder.finalize(
            inflect=inflect,
            config=config,
            hook=cls.default_inflect,
        )
        register_resource(cls)
        return cls

    def __init__(cls, name, bases, namespace, **kwargs):
        super().__init__(name, bases, namespace)


class Resource(metaclass=ResourceMeta):
    """
    Base class for API resources.

    Fields are declared in class body with `field()`:

        class Person(Resource, inflect="camel"):
            first_name = field(str)
            age = field(int, default=0)
    """
    __slots__ = ()
    __resource_schema__: ClassVar[Optional[ResourceSchema]] = None

    def __init__(self, **values: Any):
        schema = self._schema()
        unknown = set(values).difference(schema.field_names())
        if unknown:
            raise TypeError(f"{type(self).__name__} got unexpected fields: {sorted(unknown)}")
        for spec in schema.fields:
            if spec.name in values:
                setattr(self, spec.name, values[spec.name])
            else:
                setattr(self, spec.name, spec.get_default())

    @classmethod
    def _schema(cls) -> ResourceSchema:
        schema = cls.__resource_schema__
        if schema is None:
            raise TypeError(f"{cls.__name__} has no fields declared and cannot be instantiated")
        return schema

    @classmethod
    def default_inflect(cls) -> Union[NameStyle, str, None]:
        """
        Inflect mode used when resource is declared without explicit `inflect`.
        Override to change it for resource and its subclasses
        """
        return get_process_config().inflect

    @classmethod
    def inflect(cls) -> NameStyle:
        return cls._schema().inflect

    @classmethod
    def __fields__(cls) -> Tuple[str, ...]:
        return cls._schema().field_names()

    @classmethod
    def __types__(cls) -> Dict[str, Any]:
        return {spec.name: spec.annotation for spec in cls._schema().fields}

    @classmethod
    def __type__(cls, name: str) -> Any:
        spec = cls._schema().get_field(name)
        if spec is None:
            return None
        return spec.annotation

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, name) == getattr(other, name)
            for name in self._schema().field_names()
        )

    __hash__ = None  # type: ignore

    def __repr__(self):
        values = ", ".join(
            f"{name}={getattr(self, name, None)!r}"
            for name in self._schema().field_names()
        )
        return f"{type(self).__name__}({values})"


def make_resource(
    name: str,
    fields: Iterable[FieldDefinition],
    *,
    inflect: Union[NameStyle, str, None] = None,
    config: Optional[Config] = None,
    bases: Tuple[type, ...] = (Resource,),
    module: Optional[str] = None,
) -> type:
    """
    Create resource class dynamically.

    :param fields: field names or tuples `(name, type)` / `(name, type, options)`
    """
    if module is None:
        try:
            module = sys._getframe(1).f_globals.get("__name__", "__main__")
        except (AttributeError, ValueError):
            module = __name__

    def exec_body(ns):
        ns["__module__"] = module
        ns["__qualname__"] = name
        for item in fields:
            if isinstance(item, str):
                field_name, type_, options = item, str, {}
            elif len(item) == 2:
                field_name, type_ = item  # type: ignore
                options = {}
            else:
                field_name, type_, options = item  # type: ignore
            ns[field_name] = field(type_, **options)

    return types.new_class(name, bases, {"inflect": inflect, "config": config}, exec_body)
