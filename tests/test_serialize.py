from datetime import date
from enum import Enum
from typing import List
from unittest import TestCase

from resource_factory import (
    Config, CyclicReferenceError, Factory, InvalidFieldError, Resource, field, serialize,
)


class Color(Enum):
    red = "r"
    green = "g"


class Money:
    def __init__(self, amount: int, currency: str):
        self.amount = amount
        self.currency = currency

    def __serialize__(self):
        return f"{self.amount} {self.currency}"


class Person(Resource, inflect="camel"):
    first_name = field(str)
    age = field(int, default=0)


class Tag(Resource):
    label = field(str)
    color = field(Color, default=Color.red)


class Article(Resource, inflect="kebab"):
    title = field(str)
    author = field(Person)
    tags = field(List[Tag], default_factory=list)
    published = field(date)
    price = field(Money)
    extra = field(dict)


class Verbose(Resource, config=Config(omit_default=False)):
    name = field(str, default="unnamed")
    count = field(int, default=0)


class Node(Resource):
    name = field(str)
    parent = field("Node")


default_tags_calls = []


def default_tags():
    default_tags_calls.append(1)
    return []


class Counted(Resource):
    tags = field(List[str], default_factory=default_tags)


class TestSerialize(TestCase):
    def setUp(self) -> None:
        self.factory = Factory()

    def test_person(self):
        self.assertEqual(self.factory.serialize(Person(first_name="Ada", age=0)), {"firstName": "Ada"})
        self.assertEqual(
            self.factory.serialize(Person(first_name="Ada", age=36)),
            {"firstName": "Ada", "age": 36},
        )

    def test_none_omitted(self):
        self.assertEqual(self.factory.serialize(Person()), {})

    def test_default_omitted(self):
        self.assertEqual(self.factory.serialize(Tag(label="x", color=Color.red)), {"label": "x"})
        self.assertEqual(self.factory.serialize(Article(tags=[])), {})

    def test_omit_default_disabled(self):
        self.assertEqual(self.factory.serialize(Verbose()), {"name": "unnamed", "count": 0})

    def test_default_factory_called_once(self):
        items = [Counted(tags=["a"]), Counted(tags=["b"]), Counted(tags=[])]
        default_tags_calls.clear()
        self.assertEqual(self.factory.serialize(items), [{"tags": ["a"]}, {"tags": ["b"]}, {}])
        self.assertEqual(self.factory.serialize(items), [{"tags": ["a"]}, {"tags": ["b"]}, {}])
        self.assertEqual(len(default_tags_calls), 1)

    def test_empty_string_kept(self):
        self.assertEqual(
            self.factory.serialize(Person(first_name="", age=False)),
            {"firstName": ""},
        )
        self.assertEqual(self.factory.serialize(Tag(label="")), {"label": ""})

    def test_nested(self):
        article = Article(
            title="Engines",
            author=Person(first_name="Ada", age=36),
            tags=[Tag(label="math"), Tag(label="history", color=Color.green)],
        )
        self.assertEqual(self.factory.serialize(article), {
            "title": "Engines",
            "author": {"firstName": "Ada", "age": 36},
            "tags": [{"label": "math"}, {"label": "history", "color": "g"}],
        })

    def test_order(self):
        article = Article(
            extra={"a": 1},
            title="Engines",
            author=Person(first_name="Ada"),
        )
        self.assertEqual(list(self.factory.serialize(article)), ["title", "author", "extra"])

    def test_opaque(self):
        published = date(1843, 10, 1)
        result = self.factory.serialize(Article(published=published))
        self.assertIs(result["published"], published)

    def test_serialize_hook(self):
        result = self.factory.serialize(Article(price=Money(10, "GBP")))
        self.assertEqual(result, {"price": "10 GBP"})

    def test_dict_values(self):
        result = self.factory.serialize(Article(extra={"author": Person(first_name="Ada")}))
        self.assertEqual(result, {"extra": {"author": {"firstName": "Ada"}}})

    def test_list(self):
        people = [Person(first_name="Ada"), Person(first_name="Grace", age=85)]
        self.assertEqual(
            self.factory.serialize(people),
            [self.factory.serialize(people[0]), self.factory.serialize(people[1])],
        )
        self.assertEqual(self.factory.serialize([]), [])

    def test_not_resource(self):
        self.assertEqual(self.factory.serialize(1), 1)
        self.assertEqual(self.factory.serialize("Ada"), "Ada")
        self.assertIsNone(self.factory.serialize(None))

    def test_module_level(self):
        self.assertEqual(serialize(Person(first_name="Ada")), {"firstName": "Ada"})

    def test_serializer(self):
        serializer = self.factory.serializer(Person)
        self.assertEqual(serializer(Person(first_name="Ada")), {"firstName": "Ada"})
        self.assertIs(self.factory.stack_serializer(Person), self.factory.stack_serializer(Person))


class TestCycle(TestCase):
    def test_self_reference(self):
        node = Node(name="root")
        node.parent = node
        with self.assertRaises(CyclicReferenceError):
            Factory().serialize(node)

    def test_indirect(self):
        first = Node(name="first")
        second = Node(name="second", parent=first)
        first.parent = second
        with self.assertRaises(CyclicReferenceError):
            Factory(debug_path=True).serialize(first)

    def test_shared_is_not_cycle(self):
        root = Node(name="root")
        extra = {"left": Node(name="left", parent=root), "right": Node(name="right", parent=root)}
        result = Factory().serialize(Article(extra=extra))
        self.assertEqual(result, {"extra": {
            "left": {"name": "left", "parent": {"name": "root"}},
            "right": {"name": "right", "parent": {"name": "root"}},
        }})


class Broken:
    def __serialize__(self):
        raise ValueError("cannot serialize")


class TestPath(TestCase):
    def test_path(self):
        article = Article(extra={"items": [1, Broken()]})
        with self.assertRaises(InvalidFieldError) as cm:
            Factory(debug_path=True).serialize(article)
        self.assertEqual(cm.exception.field_path, ["extra", "items", 1])

    def test_no_path(self):
        article = Article(extra={"items": [1, Broken()]})
        with self.assertRaises(ValueError) as cm:
            Factory().serialize(article)
        self.assertNotIsInstance(cm.exception, InvalidFieldError)
