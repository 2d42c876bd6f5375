import pytest

from argwire.exceptions import MissingValueError, UnrecognizedArgumentsError
from argwire.parser import Argument, ArgumentAction, Nargs, Parser, Placeholder


def build_parser(*arguments):
    parser = Parser()
    for argument in arguments:
        parser.add_argument(argument, group="default")
    return parser


def test_at_least_one():
    nums = Placeholder(list[int])
    parser = build_parser(Argument("--nums", nums, nargs=Nargs.AT_LEAST_ONE))

    parser.parse(["--nums", "1", "2", "3"])
    assert nums.value == [1, 2, 3]
    assert parser.find("--nums").consumed_value_count == 3

    with pytest.raises(MissingValueError):
        parser.parse(["--nums"])


def test_any():
    tags = Placeholder(list[str])
    parser = build_parser(Argument("--tags", tags, nargs="*"))

    parser.parse(["--tags", "a", "b"])
    assert tags.value == ["a", "b"]

    parser.parse(["--tags"])
    assert tags.value == []

    parser.parse([])
    assert tags.value == []


def test_any_stops_at_next_marker():
    tags = Placeholder(list[str])
    verbose = Placeholder(bool)
    parser = build_parser(
        Argument("--tags", tags, nargs="*"),
        Argument("--verbose", verbose),
    )

    parser.parse(["--tags", "a", "--verbose"])
    assert tags.value == ["a"]
    assert verbose.value is True


def test_exact_count():
    point = Placeholder(list[int])
    parser = build_parser(Argument("--point", point, nargs=2))

    parser.parse(["--point", "1", "2"])
    assert point.value == [1, 2]

    with pytest.raises(MissingValueError):
        parser.parse(["--point", "1"])

    with pytest.raises(UnrecognizedArgumentsError) as excinfo:
        parser.parse(["--point", "1", "2", "3"])
    assert excinfo.value.tokens == ["3"]


def test_at_most_one_without_value_uses_zero_value():
    level = Placeholder(int, 7)
    verbose = Placeholder(bool)
    parser = build_parser(Argument("--level", level), Argument("--verbose", verbose))

    parser.parse(["--level", "--verbose"])
    assert level.value == 0
    assert verbose.value is True

    parser.parse([])
    assert level.value == 7


def test_at_most_one_without_value_uses_explicit_default():
    level = Placeholder(int)
    parser = build_parser(Argument("--level", level, default=3))

    parser.parse([])
    assert level.value == 3

    parser.parse(["--level"])
    assert level.value == 3

    parser.parse(["--level", "5"])
    assert level.value == 5


def test_at_most_one_repeated_last_wins():
    level = Placeholder(int)
    parser = build_parser(Argument("--level", level))

    parser.parse(["--level", "1", "--level", "2"])
    assert level.value == 2
    assert parser.find("--level").consumed_flag_count == 2
    assert parser.find("--level").consumed_value_count == 1


def test_exact_count_repeated_stays_within_bound():
    point = Placeholder(list[int])
    parser = build_parser(Argument("--point", point, nargs=2))

    parser.parse(["--point", "1", "2", "--point", "3", "4"])
    assert point.value == [3, 4]
    assert parser.find("--point").consumed_value_count == 2


def test_unbounded_repeated_accumulates_count():
    tags = Placeholder(list[str])
    parser = build_parser(Argument("--tags", tags, nargs="+", action="append"))

    parser.parse(["--tags", "a", "b", "--tags", "c"])
    assert tags.value == ["a", "b", "c"]
    assert parser.find("--tags").consumed_value_count == 3


def test_store_collects_per_match_and_append_across_matches():
    stored = Placeholder(list[str])
    appended = Placeholder(list[str])
    parser = build_parser(
        Argument("--stored", stored, nargs="+"),
        Argument("--appended", appended, nargs="+", action=ArgumentAction.APPEND),
    )

    parser.parse(
        ["--stored", "a", "--appended", "a", "--stored", "b", "--appended", "b", "c"]
    )
    assert stored.value == ["b"]
    assert appended.value == ["a", "b", "c"]


def test_container_token_with_spaces_is_split():
    nums = Placeholder(list[int])
    parser = build_parser(Argument("--nums", nums, nargs="+"))

    parser.parse(["--nums", "1 2", "3"])
    assert nums.value == [1, 2, 3]
    assert parser.find("--nums").consumed_value_count == 2


def test_count():
    verbose = Placeholder(int)
    parser = build_parser(Argument("--verbose", verbose, action="count"))

    parser.parse(["--verbose", "--verbose", "--verbose"])
    assert verbose.value == 3

    parser.parse([])
    assert verbose.value == 0


def test_negative_numbers_are_values():
    offset = Placeholder(int)
    parser = build_parser(Argument("--offset", offset))

    parser.parse(["--offset", "-5"])
    assert offset.value == -5
