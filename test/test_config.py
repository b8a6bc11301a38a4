from pathlib import Path

from winenvedit.utils.config import (
    DEFAULT_CONFIG,
    get_config_path,
    get_default_profile_path,
    get_profile_path,
    load_config,
    save_config,
)


class TestConfigPaths:
    def test_xdg_dirs(self, isolated_config):
        assert get_config_path() == isolated_config["config"] / "winenvedit" / "config.toml"
        assert get_default_profile_path() == isolated_config["data"] / "winenvedit" / "environment.toml"

    def test_home_fallback(self, temp_dir, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setenv("HOME", str(temp_dir))

        assert get_config_path() == temp_dir / ".config" / "winenvedit" / "config.toml"
        assert get_default_profile_path() == temp_dir / ".local" / "share" / "winenvedit" / "environment.toml"


class TestLoadConfig:
    def test_defaults(self, isolated_config):
        config = load_config()
        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_defaults_not_shared(self, isolated_config):
        load_config()["history"]["max_depth"] = 1
        assert load_config()["history"]["max_depth"] == 50

    def test_merges_user_config(self, isolated_config):
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text('[history]\nmax_depth = 10\n\n[extra]\nkey = "value"\n')

        config = load_config()
        assert config["history"]["max_depth"] == 10
        assert config["logging"]["level"] == "warning"
        assert config["extra"] == {"key": "value"}

    def test_save_and_load(self, isolated_config):
        config = load_config()
        config["display"]["show_volatile"] = True
        save_config(config)

        assert get_config_path().exists()
        assert load_config()["display"]["show_volatile"] is True


class TestGetProfilePath:
    def test_default(self, isolated_config):
        assert get_profile_path(load_config()) == get_default_profile_path()

    def test_configured(self, temp_dir):
        config = {"store": {"profile": str(temp_dir / "env.toml")}}
        assert get_profile_path(config) == temp_dir / "env.toml"

    def test_expands_user(self, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        assert get_profile_path({"store": {"profile": "~/env.toml"}}) == Path(temp_dir) / "env.toml"
