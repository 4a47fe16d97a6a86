import pytest

from concierge.command import Command
from concierge.exceptions import UsageError
from concierge.flags import CommandFlag
from concierge.option import Option
from concierge.pattern import parse
from concierge.resolver import CommandTrie, Resolver


def make(pattern: str, flags: CommandFlag = CommandFlag.NONE) -> Command:
    return Command.from_definition(parse(pattern), flags=flags)


@pytest.fixture
def commands():
    return [
        make("add <item>"),
        make("remote add <name> <url>"),
        make("remote remove <name>"),
        make("remote"),
    ]


def test_trie_sizes(commands):
    trie = CommandTrie(commands)
    assert trie.root.size == 4
    assert trie.root.children["remote"].size == 3
    assert trie.root.children["remote"].children["add"].size == 1
    assert [command.name for command in trie.root.children["remote"].commands] == [
        "remote"
    ]


def test_selects_single_segment_command(commands):
    resolution = Resolver(commands, []).resolve(["add", "widget"])
    assert resolution.command.name == "add"
    assert resolution.command_path == ["add"]
    assert resolution.rest == ["widget"]


def test_selects_longest_path(commands):
    resolution = Resolver(commands, []).resolve(["remote", "add", "origin", "url"])
    assert resolution.command.name == "remote add"
    assert resolution.rest == ["origin", "url"]


def test_falls_back_to_prefix_command(commands):
    resolution = Resolver(commands, []).resolve(["remote", "show"])
    assert resolution.command.name == "remote"
    assert resolution.command_path == ["remote"]
    assert resolution.rest == ["show"]


def test_prefix_command_without_leftovers(commands):
    resolution = Resolver(commands, []).resolve(["remote"])
    assert resolution.command.name == "remote"
    assert resolution.rest == []


def test_no_match_raises(commands):
    with pytest.raises(UsageError, match="No commands match"):
        Resolver(commands, []).resolve(["bogus"])


def test_empty_argv_without_default_raises(commands):
    with pytest.raises(UsageError, match="No commands match"):
        Resolver(commands, []).resolve([])


def test_default_command_catches_unmatched_tokens():
    commands = [make("add <item>"), make("run [... args]", CommandFlag.DEFAULT)]
    resolution = Resolver(commands, []).resolve(["x", "y", "z"])
    assert resolution.command.name == "run"
    assert resolution.command_path == []
    assert resolution.rest == ["x", "y", "z"]


def test_default_command_on_empty_argv():
    commands = [make("add <item>"), make("run [... args]", CommandFlag.DEFAULT)]
    resolution = Resolver(commands, []).resolve([])
    assert resolution.command.name == "run"
    assert resolution.rest == []


def test_explicit_path_beats_default():
    commands = [make("run [... args]", CommandFlag.DEFAULT), make("add <item>")]
    resolution = Resolver(commands, []).resolve(["add", "widget"])
    assert resolution.command.name == "add"
    assert resolution.rest == ["widget"]


def test_command_path_is_a_snapshot(commands):
    resolver = Resolver(commands, [])
    resolution = resolver.resolve(["remote", "show", "more"])
    assert resolution.command_path == ["remote"]
    assert resolver.command_buffer == ["remote", "show"]
    assert resolution.rest == ["show", "more"]


def test_global_option_does_not_lock(commands):
    verbose = Option(short_name="v", long_name="verbose")
    resolution = Resolver(commands, [verbose]).resolve(["--verbose", "remote", "add", "a", "b"])
    assert resolution.command.name == "remote add"
    assert resolution.env == {"verbose": True}
