from .config import Config, Unknown, config_from_env, configure, get_process_config, merge_config, set_process_config
from .exceptions import (
    CyclicReferenceError, DeclarationError, DuplicateFieldError, FrozenSchemaError,
    InvalidFieldError, ParseError, UnknownFieldsError,
)
from .factory import Factory, deserialize, serialize
from .fields import FieldSpec, field
from .naming import NameStyle, convert_case
from .resource import Resource, make_resource
from .schema import ResourceSchema, SchemaBuilder
from .type_tags import DictOf, ListOf, Nested, Primitive, TypeTag, is_resource

__all__ = [
    "Config",
    "CyclicReferenceError",
    "DeclarationError",
    "DictOf",
    "DuplicateFieldError",
    "Factory",
    "FieldSpec",
    "FrozenSchemaError",
    "InvalidFieldError",
    "ListOf",
    "NameStyle",
    "Nested",
    "ParseError",
    "Primitive",
    "Resource",
    "ResourceSchema",
    "SchemaBuilder",
    "TypeTag",
    "Unknown",
    "UnknownFieldsError",
    "config_from_env",
    "configure",
    "convert_case",
    "deserialize",
    "field",
    "get_process_config",
    "is_resource",
    "make_resource",
    "merge_config",
    "serialize",
    "set_process_config",
]
