import pytest

from concierge.exceptions import PatternError
from concierge.option import Option
from concierge.pattern import parse


def test_parse_full_pattern():
    definition = parse(
        "remote add <name> <url> [branch] [... refspecs] [-f,--fetch] [--tags MODE]"
    )
    assert definition.path == ("remote", "add")
    assert definition.required_arguments == ("name", "url")
    assert definition.optional_arguments == ("branch",)
    assert definition.spread == "refspecs"
    assert definition.options == (
        Option(short_name="f", long_name="fetch"),
        Option(long_name="tags", argument_name="MODE", initial_value=None),
    )
    assert definition.has_arguments


def test_parse_empty_pattern():
    definition = parse("")
    assert definition.path == ()
    assert definition.options == ()
    assert not definition.has_arguments


def test_parse_negated_options_default_to_true():
    definition = parse("[--no-color] [--without-cache]")
    color, cache = definition.options
    assert color.long_name == "color"
    assert color.initial_value is True
    assert cache.long_name == "with-cache"
    assert cache.initial_value is True
    assert cache.disable_flag == "--without-cache"


def test_parse_counter():
    (option,) = parse("[-vvv]").options
    assert option.short_name == "v"
    assert option.is_counter
    assert option.max_value == 3
    assert option.initial_value == 0


def test_parse_short_bundle():
    options = parse("[-abc]").options
    assert [option.short_name for option in options] == ["a", "b", "c"]
    assert all(option.initial_value is False for option in options)


def test_parse_short_valued_option():
    (option,) = parse("[-n,--name NAME]").options
    assert option.short_name == "n"
    assert option.long_name == "name"
    assert option.argument_name == "NAME"
    assert option.initial_value is None
    assert option.env_name == "name"


def test_spread_with_space():
    assert parse("run [...args]").spread == "args"
    assert parse("run [... args]").spread == "args"


@pytest.mark.parametrize(
    "pattern",
    [
        "add [opt] <req>",
        "add [... rest] <req>",
        "add [... rest] [opt]",
        "add <item> more",
        "add <item> <item>",
        "add <bad name>",
        "add [-x,-y]",
        "add [--no-color VALUE]",
        "add [-vv COUNT]",
        "add [-abc,--alpha]",
        "add [--Bad]",
        "add <unterminated",
        "add [--x",
        "add $weird",
    ],
)
def test_malformed_patterns(pattern):
    with pytest.raises(PatternError):
        parse(pattern)


def test_pattern_must_be_string():
    with pytest.raises(PatternError):
        parse(None)  # type: ignore[arg-type]


def test_parse_counter_with_long_name():
    (option,) = parse("[-vvv,--verbose]").options
    assert option.long_name == "verbose"
    assert option.max_value == 3
    assert option.env_name == "verbose"
