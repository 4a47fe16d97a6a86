import pytest

from concierge import Concierge


def build(action) -> Concierge:
    cli = Concierge("prog")
    cli.add_command("go [... args]", action)
    return cli


@pytest.mark.parametrize(
    "result, code",
    [(3, 3), (0, 0), (None, 0), ("text", 0), (True, 0)],
)
def test_exit_status(result, code):
    with pytest.raises(SystemExit) as exc_info:
        build(lambda env: result).run_exit("prog", ["go"])
    assert exc_info.value.code == code


def test_usage_error_exits_one(capsys):
    with pytest.raises(SystemExit) as exc_info:
        build(lambda env: 0).run_exit("prog", ["--bogus"])
    assert exc_info.value.code == 1
    assert 'Unknown option "bogus"' in capsys.readouterr().out


def test_unexpected_error_exits_one(capsys):
    def fail(env):
        raise RuntimeError("boom")

    with pytest.raises(SystemExit) as exc_info:
        build(fail).run_exit("prog", ["go"])
    assert exc_info.value.code == 1
    assert "RuntimeError: boom" in capsys.readouterr().out


def test_keyboard_interrupt_exits_130():
    def interrupt(env):
        raise KeyboardInterrupt

    with pytest.raises(SystemExit) as exc_info:
        build(interrupt).run_exit("prog", ["go"])
    assert exc_info.value.code == 130


def test_defaults_to_sys_argv(monkeypatch):
    monkeypatch.setattr("sys.argv", ["prog", "go", "a", "b"])
    with pytest.raises(SystemExit) as exc_info:
        build(lambda env: len(env["args"])).run_exit()
    assert exc_info.value.code == 2
