from argparse import Namespace
from dataclasses import dataclass, field

from argwire.parser import (
    Argument,
    AttributeBinding,
    ItemBinding,
    Parser,
    Placeholder,
)


@dataclass
class Options:
    verbose: bool = False
    level: int = 1
    tags: list[str] = field(default_factory=list)


def test_placeholder_zero_value():
    assert Placeholder(int).value == 0
    assert Placeholder(bool).value is False
    assert Placeholder(list[int]).value == []
    assert Placeholder().value == ""
    assert Placeholder().target_type is str


def test_placeholder_initial_value():
    placeholder = Placeholder(int, 7)
    assert placeholder.get() == 7
    placeholder.set(9)
    assert placeholder.value == 9
    assert repr(placeholder) == "Placeholder[int](9)"


def test_attribute_binding_uses_annotations():
    options = Options()
    assert AttributeBinding(options, "verbose").target_type is bool
    assert AttributeBinding(options, "level").target_type is int
    assert AttributeBinding(options, "tags").target_type == list[str]


def test_attribute_binding_infers_from_value():
    namespace = Namespace(port=8080, host=None)
    assert AttributeBinding(namespace, "port").target_type is int
    assert AttributeBinding(namespace, "host").target_type is str
    assert AttributeBinding(namespace, "host", float).target_type is float


def test_attribute_binding_reads_and_writes():
    namespace = Namespace(port=8080)
    binding = AttributeBinding(namespace, "port")
    binding.set(9000)
    assert binding.get() == 9000
    assert namespace.port == 9000


def test_item_binding():
    settings = {"retries": 3}
    binding = ItemBinding(settings, "retries")
    assert binding.target_type is int
    binding.set(5)
    assert settings["retries"] == 5

    missing = ItemBinding(settings, "name")
    assert missing.target_type is str
    assert missing.get() is None


def test_is_boolean():
    assert Placeholder(bool).is_boolean
    assert not Placeholder(int).is_boolean


def test_parse_into_dataclass():
    options = Options()
    parser = Parser()
    parser.add_argument(Argument("--verbose", AttributeBinding(options, "verbose")), group="default")
    parser.add_argument(Argument("--level", AttributeBinding(options, "level")), group="default")
    parser.add_argument(
        Argument("tags", AttributeBinding(options, "tags"), nargs="*"), group="default"
    )

    parser.parse(["--level", "3", "a", "b"])
    assert options == Options(verbose=False, level=3, tags=["a", "b"])

    parser.parse([])
    assert options == Options()


def test_parse_into_mapping():
    settings = {"retries": 3}
    parser = Parser()
    parser.add_argument(Argument("--retries", ItemBinding(settings, "retries")), group="default")

    parser.parse(["--retries", "10"])
    assert settings["retries"] == 10

    parser.parse([])
    assert settings["retries"] == 3
