import os
from pathlib import Path

import pytest
import yaml

from stunt.core.config import AnalyzerOptions, StuntConfig


@pytest.fixture
def dirs(tmp_path, monkeypatch):
    for key in list(os.environ):
        if key.startswith("STUNT_"):
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    project = tmp_path / "project"
    nested = project / "src" / "deep"
    nested.mkdir(parents=True)
    home.mkdir()
    return home, project, nested


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data))


def test_defaults_without_files(dirs):
    home, project, _ = dirs
    cfg = StuntConfig(home=home, cwd=project)

    assert cfg.project_config_file is None
    assert cfg.get_indent() == 2
    assert cfg.get_log_level() == "WARNING"
    assert cfg.get_analyzer_options() == AnalyzerOptions(True, False)
    assert cfg.get_display_flags() == {"source": True, "tokens": True, "ast": True}


def test_global_config_overrides_defaults(dirs):
    home, project, _ = dirs
    write_yaml(home / ".stunt" / "config.yaml", {"output": {"indent": 8}})

    cfg = StuntConfig(home=home, cwd=project)

    assert cfg.get_indent() == 8
    # Sibling keys survive the deep merge
    assert cfg.get_display_flags()["tokens"] is True


def test_project_config_found_upwards_and_wins(dirs):
    home, project, nested = dirs
    write_yaml(home / ".stunt" / "config.yaml", {"output": {"indent": 8}})
    write_yaml(
        project / ".stunt" / "config.yaml",
        {"output": {"indent": 4}, "analyzer": {"warn_unused": False}},
    )

    cfg = StuntConfig(home=home, cwd=nested)

    assert cfg.project_config_file == project / ".stunt" / "config.yaml"
    assert cfg.get_indent() == 4
    assert cfg.get_analyzer_options().warn_unused is False


def test_home_directory_is_not_a_project(dirs):
    home, _, _ = dirs
    write_yaml(home / ".stunt" / "config.yaml", {"output": {"indent": 3}})

    cfg = StuntConfig(home=home, cwd=home)

    assert cfg.project_config_file is None
    assert cfg.get_indent() == 3


def test_environment_overrides(dirs, monkeypatch):
    home, project, _ = dirs
    monkeypatch.setenv("STUNT_OUTPUT__INDENT", "6")
    monkeypatch.setenv("STUNT_ANALYZER__WARNINGS_AS_ERRORS", "true")
    monkeypatch.setenv("STUNT_LOGGING__LEVEL", "debug")

    cfg = StuntConfig(home=home, cwd=project)

    assert cfg.get_indent() == 6
    assert cfg.get_analyzer_options().warnings_as_errors is True
    assert cfg.get_log_level() == "DEBUG"


def test_malformed_config_is_ignored(dirs, capsys):
    home, project, _ = dirs
    config_file = home / ".stunt" / "config.yaml"
    config_file.parent.mkdir()
    config_file.write_text("output: [unclosed")

    cfg = StuntConfig(home=home, cwd=project)

    assert cfg.get_indent() == 2
    assert "Could not load config" in capsys.readouterr().err


def test_non_mapping_config_is_ignored(dirs, capsys):
    home, project, _ = dirs
    write_yaml(home / ".stunt" / "config.yaml", ["not", "a", "mapping"])

    cfg = StuntConfig(home=home, cwd=project)

    assert cfg.get_indent() == 2
    assert "Ignoring config" in capsys.readouterr().err


def test_config_is_cached_until_reload(dirs):
    home, project, _ = dirs
    cfg = StuntConfig(home=home, cwd=project)
    assert cfg.get_indent() == 2

    write_yaml(home / ".stunt" / "config.yaml", {"output": {"indent": 5}})
    assert cfg.get_indent() == 2
    assert cfg.get_config(force_reload=True)["output"]["indent"] == 5


def test_write_project_config(dirs):
    home, project, _ = dirs
    cfg = StuntConfig(home=home, cwd=project)

    path = cfg.write_project_config()

    assert path == project / ".stunt" / "config.yaml"
    assert yaml.safe_load(path.read_text())["output"]["indent"] == 2
    assert cfg.project_config_file == path

    with pytest.raises(FileExistsError):
        cfg.write_project_config()
    assert cfg.write_project_config(force=True) == path


def test_removed_working_directory(dirs, tmp_path, monkeypatch):
    home, _, _ = dirs
    gone = tmp_path / "gone"
    gone.mkdir()
    monkeypatch.chdir(gone)
    gone.rmdir()

    cfg = StuntConfig(home=home)

    assert cfg.cwd is None
    assert cfg.project_config_file is None
    assert cfg.get_indent() == 2
    with pytest.raises(FileNotFoundError):
        cfg.write_project_config()


def test_unreadable_directory_stops_project_search(dirs, monkeypatch):
    home, _, nested = dirs

    def denied(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "is_dir", denied)
    cfg = StuntConfig(home=home, cwd=nested)

    assert cfg.project_config_file is None


def test_config_manager_is_built_once(monkeypatch, tmp_path):
    from stunt.core import config as config_module

    built = []

    def fake_config():
        built.append(StuntConfig(home=tmp_path, cwd=tmp_path))
        return built[-1]

    monkeypatch.setattr(config_module, "_config_manager", None)
    monkeypatch.setattr(config_module, "StuntConfig", fake_config)

    first = config_module.get_config_manager()
    assert config_module.get_config_manager() is first
    assert built == [first]
