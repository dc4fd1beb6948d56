import os

import pytest

from stunt.core import config as config_module
from stunt.core.config import StuntConfig


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """A config that only sees files under tmp_path, shared with the CLI"""
    for key in list(os.environ):
        if key.startswith("STUNT_"):
            monkeypatch.delenv(key)

    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()

    cfg = StuntConfig(home=home, cwd=work)
    monkeypatch.setattr(config_module, "_config_manager", cfg)
    monkeypatch.chdir(work)
    return cfg
