from typing import Any, Dict, List, Type, Union

from .common import Parser, Serializer, T
from .parsers import get_complex_parser
from .serializers import StackSerializer, get_complex_serializer, get_value_serializer
from .type_tags import is_resource


def get_resource_type(target: Any) -> type:
    resource = target if isinstance(target, type) else type(target)
    if not is_resource(resource):
        raise TypeError(f"{resource!r} is not a resource type")
    return resource


class Factory:
    """
    Facade class for all data conversion operations.

    Converters are created once per resource type and cached
    """

    def __init__(self, debug_path: bool = False):
        """
        :param debug_path: show path to broken field in exceptions
                           (InvalidFieldError will be raised)
        """
        self.debug_path = debug_path
        self._parsers: Dict[type, Parser] = {}
        self._serializers: Dict[type, StackSerializer] = {}
        self._value_serializer = get_value_serializer(self, debug_path)

    def parser(self, resource: Type[T]) -> Parser[T]:
        """
        Returns parser to create `resource` instances from simple data structures
        """
        try:
            return self._parsers[resource]
        except KeyError:
            pass
        parser = get_complex_parser(self, get_resource_type(resource), self.debug_path)
        self._parsers[resource] = parser
        return parser

    def stack_serializer(self, resource: type) -> StackSerializer:
        try:
            return self._serializers[resource]
        except KeyError:
            pass
        schema = get_resource_type(resource).__resource_schema__
        serializer = get_complex_serializer(self, schema, self.debug_path)
        self._serializers[resource] = serializer
        return serializer

    def serializer(self, resource: Type[T]) -> Serializer[T]:
        """
        Returns serializer to convert `resource` instances to simple data structures
        """
        stack_serializer = self.stack_serializer(resource)

        def serializer(data):
            return stack_serializer(data, [])

        return serializer

    def serialize(self, data: Any) -> Any:
        """
        Convert resource instance or list of them to plain structures.
        Values which are not resources are returned as is
        """
        if isinstance(data, (list, tuple)):
            return [self.serialize(x) for x in data]
        return self._value_serializer(data, [])

    def deserialize(self, target: Any, data: Union[Any, List[Any]]) -> Any:
        """
        Create instance of resource `target` (class or instance) from `data`.
        List of mappings produces list of instances
        """
        parser = self.parser(get_resource_type(target))
        if isinstance(data, list):
            return [parser(x) for x in data]
        return parser(data)


_default_factory = Factory()


def serialize(data: Any) -> Any:
    return _default_factory.serialize(data)


def deserialize(target: Any, data: Any) -> Any:
    return _default_factory.deserialize(target, data)
