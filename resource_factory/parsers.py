import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, List

from .common import Parser, T
from .config import Unknown
from .exceptions import InvalidFieldError, ParseError, UnknownFieldsError
from .type_tags import DictOf, Lazy, ListOf, Nested, Primitive, TypeTag

logger = logging.getLogger(__name__)

PARSER_EXCEPTIONS = (ValueError, TypeError, AttributeError, LookupError)


def get_element_parser(parser: Parser[T], key: Any) -> Parser[T]:
    def element_parser(data: Any) -> T:
        return dyn_element_parser(parser, data, key)

    return element_parser


def dyn_element_parser(parser: Parser[T], data: Any, key: Any) -> T:
    try:
        return parser(data)
    except InvalidFieldError as e:
        e._prepend_path(key)
        raise
    except PARSER_EXCEPTIONS as e:
        raise InvalidFieldError(str(e), [key])


def parse_stub(data: T) -> T:
    return data


def get_primitive_parser(type_: Any) -> Parser:
    if not isinstance(type_, type):
        return parse_stub
    if issubclass(type_, Enum):
        return type_
    deserialize_hook = getattr(type_, "__deserialize__", None)
    if callable(deserialize_hook):
        return deserialize_hook
    return parse_stub


def get_optional_parser(parser: Parser[T]) -> Parser:
    def optional_parser(data):
        if data is None:
            return None
        return parser(data)

    return optional_parser


def get_collection_parser(item_parser: Parser[T], collection: type, debug_path: bool) -> Parser:
    def check_list(data):
        if not isinstance(data, (list, tuple)):
            raise ParseError(f"Expected list, got {type(data).__name__}")

    if debug_path:
        def collection_parser(data):
            check_list(data)
            return collection(dyn_element_parser(item_parser, x, i) for i, x in enumerate(data))
    else:
        def collection_parser(data):
            check_list(data)
            return collection(item_parser(x) for x in data)
    return collection_parser


def get_dict_parser(value_parser: Parser[T], debug_path: bool) -> Parser[Dict[Any, T]]:
    def check_mapping(data):
        if not isinstance(data, Mapping):
            raise ParseError(f"Expected mapping, got {type(data).__name__}")

    if debug_path:
        def dict_parser(data):
            check_mapping(data)
            return {k: dyn_element_parser(value_parser, v, k) for k, v in data.items()}
    else:
        def dict_parser(data):
            check_mapping(data)
            return {k: value_parser(v) for k, v in data.items()}
    return dict_parser


def get_nested_parser(factory, resource: type, debug_path: bool) -> Parser:
    # resolved at call time, resource can be declared after the one referencing it
    def nested_parser(data):
        parser = factory.parser(resource)
        if isinstance(data, list):
            if debug_path:
                return [dyn_element_parser(parser, x, i) for i, x in enumerate(data)]
            return [parser(x) for x in data]
        return parser(data)

    return nested_parser


def get_forward_parser(factory, tag: Lazy, debug_path: bool) -> Parser:
    resolved: List[Parser] = []

    def forward_parser(data):
        if resolved:
            return resolved[0](data)
        parser = get_tag_parser(factory, tag.resolve(), debug_path)
        if tag.is_resolved:
            resolved.append(parser)
        return parser(data)

    return forward_parser


def get_tag_parser(factory, tag: TypeTag, debug_path: bool) -> Parser:
    if isinstance(tag, Lazy):
        return get_forward_parser(factory, tag, debug_path)
    if isinstance(tag, Nested):
        parser = get_nested_parser(factory, tag.resource, debug_path)
    elif isinstance(tag, ListOf):
        parser = get_collection_parser(get_tag_parser(factory, tag.item, debug_path), tag.collection, debug_path)
    elif isinstance(tag, DictOf):
        parser = get_dict_parser(get_tag_parser(factory, tag.value, debug_path), debug_path)
    elif isinstance(tag, Primitive):
        parser = get_primitive_parser(tag.type)
    else:
        raise TypeError(f"Unsupported type tag {tag!r}")
    return get_optional_parser(parser)


def get_complex_parser(factory, resource: type, debug_path: bool) -> Parser:
    schema = resource.__resource_schema__
    field_info = tuple(
        (f.name, schema.data_name(f.name), get_tag_parser(factory, f.type, debug_path))
        for f in schema.fields
    )
    if debug_path:
        field_info = tuple(
            (field_name, data_name, get_element_parser(parser, field_name))
            for field_name, data_name, parser in field_info
        )
    forbid_unknown = schema.unknown is Unknown.FORBID
    known_fields = frozenset(data_name for _, data_name, _ in field_info)

    def complex_parser(data):
        if not isinstance(data, Mapping):
            raise ParseError(f"Cannot deserialize {schema.name} from {type(data).__name__}")
        if forbid_unknown and not known_fields.issuperset(data):
            unknown_field_names = set(data) - known_fields
            raise UnknownFieldsError(f"Cannot parse {schema.name}", unknown_field_names)

        logger.debug("Deserializing resource %s", schema.name)
        instance = schema.instantiate(resource)
        for field_name, data_name, parser in field_info:
            if data_name in data:
                setattr(instance, field_name, parser(data[data_name]))
            else:
                logger.debug("Attribute %s, inflected to %s, not found", field_name, data_name)
        return instance

    return complex_parser
