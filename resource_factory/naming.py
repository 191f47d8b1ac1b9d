import re
from enum import Enum
from typing import List, Union

_FIRST_CAP_RE = re.compile(r"(.)([A-Z][a-z]+)")
_ALL_CAP_RE = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS_RE = re.compile(r"[_\-\s]+")
_LEADING_UNDERSCORES_RE = re.compile(r"^_*")


def split_words(name: str) -> List[str]:
    name = _FIRST_CAP_RE.sub(r"\1_\2", name)
    name = _ALL_CAP_RE.sub(r"\1_\2", name)
    return [word.lower() for word in _SEPARATORS_RE.split(name) if word]


def snake(words):
    return "_".join(words)


def kebab(words):
    return "-".join(words)


def camel(words):
    if not words:
        return ""
    return f"{words[0]}{''.join(x.capitalize() for x in words[1:])}"


def pascal(words):
    return "".join(x.capitalize() for x in words)


class NameStyle(Enum):
    """
    Enumeration to describe which styles do field names fit
    in plain (serialized/unparsed) structure
    """
    none = "none"
    camel = "camel"
    pascal = "pascal"
    snake = "snake"
    kebab = "kebab"


CONVERTING_FUNC = {
    NameStyle.snake: snake,
    NameStyle.kebab: kebab,
    NameStyle.camel: camel,
    NameStyle.pascal: pascal,
}


def to_name_style(value: Union[NameStyle, str, None]) -> NameStyle:
    if value is None:
        return NameStyle.none
    if isinstance(value, NameStyle):
        return value
    try:
        return NameStyle(str(value).lower())
    except ValueError:
        raise ValueError(
            f"Unknown inflect mode {value!r}, expected one of {[x.value for x in NameStyle]}"
        ) from None


def convert_case(key: str, mode: Union[NameStyle, str, None]) -> str:
    """
    Convert `key` to naming convention `mode`.
    Leading underscores are preserved, `none` returns the key unchanged
    """
    mode = to_name_style(mode)
    if mode is NameStyle.none:
        return key
    prefix = _LEADING_UNDERSCORES_RE.match(key).group()
    return prefix + CONVERTING_FUNC[mode](split_words(key[len(prefix):]))


def convert_name(
        name: str,
        mode: Union[NameStyle, str, None],
        trim_trailing_underscore: bool,
) -> str:
    if trim_trailing_underscore:
        stripped = name.rstrip("_")
        if stripped:
            name = stripped
    return convert_case(name, mode)
