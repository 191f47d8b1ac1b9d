from enum import Enum
from typing import Any, Callable, List

from .exceptions import CyclicReferenceError, InvalidFieldError
from .schema import ResourceSchema
from .type_tags import is_resource

SERIALIZER_EXCEPTIONS = (ValueError, TypeError, AttributeError, LookupError)

# serializers receive ids of resource instances which are being serialized
# on the current path to detect instances containing themselves
Stack = List[int]
StackSerializer = Callable[[Any, Stack], Any]


def dyn_element_serializer(serializer: StackSerializer, data: Any, key: Any, stack: Stack) -> Any:
    try:
        return serializer(data, stack)
    except CyclicReferenceError:
        raise
    except InvalidFieldError as e:
        e._prepend_path(key)
        raise
    except SERIALIZER_EXCEPTIONS as e:
        raise InvalidFieldError(str(e), [key])


def get_value_serializer(factory, debug_path: bool) -> StackSerializer:
    """
    Serializer dispatching on the runtime type of a value:
    resources are serialized with their own schema, collections element-wise
    and any other value is passed as is
    """

    def value_serializer(data, stack):
        if data is None:
            return None
        cls = type(data)
        if is_resource(cls):
            return factory.stack_serializer(cls)(data, stack)
        if isinstance(data, Enum):
            return data.value
        if not isinstance(data, type) and callable(getattr(data, "__serialize__", None)):
            return data.__serialize__()
        if isinstance(data, (list, tuple, set, frozenset)):
            if debug_path:
                return [
                    dyn_element_serializer(value_serializer, x, i, stack)
                    for i, x in enumerate(data)
                ]
            return [value_serializer(x, stack) for x in data]
        if isinstance(data, dict):
            if debug_path:
                return {
                    k: dyn_element_serializer(value_serializer, v, k, stack)
                    for k, v in data.items()
                }
            return {k: value_serializer(v, stack) for k, v in data.items()}
        return data

    return value_serializer


def get_complex_serializer(factory, schema: ResourceSchema, debug_path: bool) -> StackSerializer:
    # default_factory is called once, its fresh value is used only for comparison
    field_info = tuple(
        (f.name, schema.data_name(f.name), f.get_default())
        for f in schema.fields
    )
    omit_default = schema.omit_default
    value_serializer = get_value_serializer(factory, debug_path)

    def complex_serializer(data, stack):
        marker = id(data)
        if marker in stack:
            raise CyclicReferenceError(f"{schema.name} instance references itself")
        stack.append(marker)
        try:
            container = {}
            for field_name, data_name, default in field_info:
                value = getattr(data, field_name)
                if value is None:
                    continue
                if omit_default and value == default:
                    continue
                if debug_path:
                    container[data_name] = dyn_element_serializer(value_serializer, value, field_name, stack)
                else:
                    container[data_name] = value_serializer(value, stack)
            return container
        finally:
            stack.pop()

    return complex_serializer
