from typing import Annotated, Literal

import pytest
from pydantic import Field

from concierge.exceptions import UsageError
from concierge.validation import apply_validators, validate


def test_coerces_values():
    result = validate({"port": "8080", "name": "web"}, {"port": int})
    assert result.ok
    assert result.value == {"port": 8080, "name": "web"}


def test_unknown_keys_pass_through_and_missing_keys_are_skipped():
    result = validate({"extra": "x"}, {"port": int})
    assert result.ok
    assert result.value == {"extra": "x"}


def test_collects_every_error():
    result = validate(
        {"port": "abc", "level": "loud", "retries": "12"},
        {
            "port": int,
            "level": Literal["debug", "info"],
            "retries": Annotated[int, Field(ge=0, le=10)],
        },
    )
    assert not result.ok
    assert len(result.errors) == 3
    assert result.errors[0].startswith('"port" is invalid')


def test_does_not_mutate_input():
    env = {"port": "1"}
    validate(env, {"port": int})
    assert env == {"port": "1"}


def test_apply_validators_without_rules_returns_env():
    env = {"port": "1"}
    assert apply_validators(env, {}) is env


def test_apply_validators_joins_messages():
    with pytest.raises(UsageError) as exc_info:
        apply_validators({"a": "x", "b": "y", "c": "z"}, {"a": int, "b": int, "c": int})
    message = str(exc_info.value)
    assert message.startswith("Validation failed because ")
    assert '"a" is invalid' in message
    assert ', and "c" is invalid' in message


def test_unhashable_rule():
    rule = Annotated[list[int], Field(min_length=1)]
    assert validate({"ids": ["1", "2"]}, {"ids": rule}).value == {"ids": [1, 2]}


def test_defaulted_none_is_not_validated():
    result = validate({"port": None}, {"port": int}, defaulted={"port"})
    assert result.ok
    assert result.value == {"port": None}


def test_defaulted_value_is_still_validated():
    result = validate({"level": "3", "port": "x"}, {"level": int, "port": int}, defaulted={"level"})
    assert result.value["level"] == 3
    assert len(result.errors) == 1
    assert result.errors[0].startswith('"port" is invalid')


def test_explicit_none_is_validated():
    assert not validate({"port": None}, {"port": int}).ok


def test_apply_validators_skips_defaulted_none():
    assert apply_validators({"port": None}, {"port": int}, defaulted={"port"}) == {"port": None}
