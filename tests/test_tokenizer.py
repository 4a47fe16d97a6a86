import pytest

from concierge.tokenizer import TokenType, tokenize, tokenize_all


def test_stop_token():
    token = tokenize("--")
    assert token.type is TokenType.STOP
    assert token.literal == "--"


@pytest.mark.parametrize(
    "literal, name, enabled, value",
    [
        ("--verbose", "verbose", True, None),
        ("--dry-run", "dry-run", True, None),
        ("--name=foo", "name", True, "foo"),
        ("--name=", "name", True, ""),
        ("--name=a=b", "name", True, "a=b"),
        ("--no-color", "color", False, None),
        ("--without-cache", "with-cache", False, None),
    ],
)
def test_long_options(literal, name, enabled, value):
    token = tokenize(literal)
    assert token.type is TokenType.LONG_OPTION
    assert token.name == name
    assert token.enabled is enabled
    assert token.value == value


@pytest.mark.parametrize(
    "literal, leading, value, rest",
    [
        ("-v", "v", None, ""),
        ("-abc", "a", None, "bc"),
        ("-n=foo", "n", "foo", ""),
        ("-nfoo", "n", None, "foo"),
        ("-V", "V", None, ""),
    ],
)
def test_short_options(literal, leading, value, rest):
    token = tokenize(literal)
    assert token.type is TokenType.SHORT_OPTION
    assert token.leading == leading
    assert token.value == value
    assert token.rest == rest


@pytest.mark.parametrize("literal", ["---x", "--Foo", "--1x", "-1", "-", "--a--b"])
def test_malformed_options(literal):
    assert tokenize(literal).type is TokenType.MALFORMED_OPTION


@pytest.mark.parametrize("literal", ["add", "widget", "", "1", "a-b", "path/to-x"])
def test_raw_strings(literal):
    token = tokenize(literal)
    assert token.type is TokenType.RAW_STRING
    assert token.is_raw


def test_tokenize_all_keeps_order():
    tokens = tokenize_all(["add", "--force", "-x", "--", "item"])
    assert [token.type for token in tokens] == [
        TokenType.RAW_STRING,
        TokenType.LONG_OPTION,
        TokenType.SHORT_OPTION,
        TokenType.STOP,
        TokenType.RAW_STRING,
    ]
    assert [token.literal for token in tokens] == ["add", "--force", "-x", "--", "item"]
