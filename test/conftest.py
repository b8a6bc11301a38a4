import tempfile
from pathlib import Path

import pytest

from winenvedit.core.builder import EnvironmentVariableBuilder
from winenvedit.core.types import RegistryValueKind, VariableScope
from winenvedit.store import MemoryStore


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_config(temp_dir, monkeypatch):
    config_dir = temp_dir / "config"
    data_dir = temp_dir / "data"
    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.setenv("XDG_DATA_HOME", str(data_dir))

    return {"config": config_dir, "data": data_dir}


@pytest.fixture
def sample_variables():
    return [
        EnvironmentVariableBuilder.default()
        .with_name("EDITOR").with_data("vim").build(),
        EnvironmentVariableBuilder.default()
        .with_name("GOPATH").with_data(r"%USERPROFILE%\go")
        .with_type(RegistryValueKind.EXPAND_STRING).build(),
        EnvironmentVariableBuilder.default()
        .with_name("Path").with_data(r"C:\Windows;C:\Windows\System32")
        .with_scope(VariableScope.SYSTEM).with_type(RegistryValueKind.EXPAND_STRING).build(),
        EnvironmentVariableBuilder.default()
        .with_name("SESSIONNAME").with_data("Console")
        .with_scope(VariableScope.SYSTEM).with_is_volatile(True).build(),
    ]


@pytest.fixture
def memory_store(sample_variables):
    return MemoryStore(sample_variables)
