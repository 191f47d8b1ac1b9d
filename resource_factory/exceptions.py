from typing import List, Set, Union


class DeclarationError(ValueError):
    pass


class DuplicateFieldError(DeclarationError):
    def __init__(self, field_name: str, resource_name: str):
        super().__init__(field_name, resource_name)
        self.field_name = field_name
        self.resource_name = resource_name

    def __str__(self):
        return f"field {self.field_name!r} is already defined on resource {self.resource_name}"


class FrozenSchemaError(DeclarationError):
    pass


class ParseError(ValueError):
    pass


class InvalidFieldError(ParseError):
    def __init__(self, message: str, field_path: List[Union[str, int]]):
        super().__init__(message, field_path)
        self.message = message
        self.field_path = field_path

    def _prepend_path(self, key: Union[str, int]):
        self.field_path.insert(0, key)

    def __str__(self):
        path = ", ".join(map(str, self.field_path))
        return f"Invalid data at path [{path}]: {self.message}"


class UnknownFieldsError(ParseError):
    def __init__(self, message: str, fields: Set[str]):
        super().__init__(message, fields)
        self.message = message
        self.fields = fields

    def __str__(self):
        return f"Unknown fields found {sorted(self.fields)}: {self.message}"


class CyclicReferenceError(ValueError):
    pass
