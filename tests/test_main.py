import sys
from pathlib import Path

import pytest

from concierge.__main__ import bootstrap, find_concierge_config, main, split_config_flag

CONFIG = """
program: demo
commands:
  - pattern: "echo [... words]"
    action: demo_actions.echo
"""

ACTIONS = """
def echo(env):
    print(" ".join(env["words"]))
    return 0
"""


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONCIERGE_CONFIG", raising=False)
    sys_path_before = list(sys.path)
    (tmp_path / "demo_actions.py").write_text(ACTIONS)
    yield tmp_path
    sys.path[:] = sys_path_before
    sys.modules.pop("demo_actions", None)


def test_find_concierge_config(project):
    assert find_concierge_config() is None
    config_file = project / "concierge.toml"
    config_file.touch()
    assert find_concierge_config().resolve() == config_file.resolve()


def test_find_config_from_environment(project, monkeypatch):
    config_file = project / "elsewhere.yaml"
    config_file.touch()
    monkeypatch.setenv("CONCIERGE_CONFIG", str(config_file))
    assert find_concierge_config().resolve() == config_file.resolve()


def test_bootstrap_extends_sys_path(project):
    config_file = project / "concierge.yaml"
    config_file.touch()
    assert bootstrap().resolve() == config_file.resolve()
    assert str(project.resolve()) in sys.path


def test_split_config_flag():
    assert split_config_flag(["--config", "a.yaml", "x"]) == (Path("a.yaml"), ["x"])
    assert split_config_flag(["--config=a.yaml"]) == (Path("a.yaml"), [])
    assert split_config_flag(["x", "--config", "a.yaml"]) == (
        None,
        ["x", "--config", "a.yaml"],
    )


def test_main_runs_config(project, capsys):
    (project / "concierge.yaml").write_text(CONFIG)
    with pytest.raises(SystemExit) as exc_info:
        main(["echo", "hello", "world"])
    assert exc_info.value.code == 0
    assert "hello world" in capsys.readouterr().out


def test_main_with_explicit_config(project, capsys):
    (project / "custom.yaml").write_text(CONFIG)
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", "custom.yaml", "echo", "hi"])
    assert exc_info.value.code == 0
    assert "hi" in capsys.readouterr().out


def test_main_without_config(project, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "No Concierge config found" in capsys.readouterr().out
