"""Tests for ConfigStore load/save of the configuration file."""

import os
from dataclasses import dataclass

import pytest
from unittest.mock import patch

from sdbconfig.config import ConfigError, ConfigStore, Settings, SettingsRegistry
from sdbconfig.config.defaults import CONFIG_FILE_ENV, default_config_path
from sdbconfig.utils.validators import SettingKind


@dataclass
class DemoSettings:
    verbose: bool = False
    prompt: str = "(sdb) "
    timeout: int = 1000


def _registry(cls=DemoSettings):
    return SettingsRegistry(cls())


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

class TestConfigPath:
    """Tests for default_config_path()."""

    def test_home_dot_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_config_path() == tmp_path / ".sdb.cfg"

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "custom.cfg"))
        assert default_config_path() == tmp_path / "custom.cfg"

    def test_explicit_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "custom.cfg"))
        assert default_config_path(str(tmp_path / "other.cfg")) == tmp_path / "other.cfg"


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------

class TestLoad:
    """Tests for ConfigStore.load()."""

    def test_missing_file_keeps_defaults(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        registry = _registry()

        assert ConfigStore(path).load(registry) is False

        assert registry.settings == DemoSettings()
        assert not path.exists()

    def test_overlays_values(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        path.write_text('verbose = true\nprompt = "> "\ntimeout = 250\n')
        registry = _registry()

        assert ConfigStore(path).load(registry) is True

        assert registry.settings == DemoSettings(verbose=True, prompt="> ", timeout=250)

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        path.write_text("timeout = 5\n")
        registry = _registry()

        ConfigStore(path).load(registry)

        assert registry.settings == DemoSettings(timeout=5)

    def test_empty_file(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        path.write_text("")
        registry = _registry()

        ConfigStore(path).load(registry)

        assert registry.settings == DemoSettings()

    def test_unknown_key_ignored(self, tmp_path, caplog):
        path = tmp_path / ".sdb.cfg"
        path.write_text('colour = "red"\nverbose = true\n')
        registry = _registry()

        ConfigStore(path).load(registry)

        assert registry.settings.verbose is True
        assert "colour" in caplog.text

    def test_invalid_value_ignored(self, tmp_path, caplog):
        path = tmp_path / ".sdb.cfg"
        path.write_text('timeout = "soon"\nverbose = true\n')
        registry = _registry()

        ConfigStore(path).load(registry)

        assert registry.settings.timeout == 1000
        assert registry.settings.verbose is True
        assert "timeout" in caplog.text

    def test_corrupt_file_uses_defaults(self, tmp_path, caplog):
        path = tmp_path / ".sdb.cfg"
        path.write_text('verbose = = {{ not hcl\n')
        registry = _registry()

        assert ConfigStore(path).load(registry) is False

        assert registry.settings == DemoSettings()
        assert "Failed to load configuration" in caplog.text

    def test_reads_utf8_regardless_of_locale(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        path.write_bytes('prompt = "h\u00e9llo \u2603 "\n'.encode("utf-8"))
        registry = _registry()

        ConfigStore(path).load(registry)

        assert registry.settings.prompt == "h\u00e9llo \u2603 "

    def test_hand_written_escapes(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        path.write_text('prompt = "C:\\\\temp\\\\ \\u0024{x"\n')
        registry = _registry()

        ConfigStore(path).load(registry)

        assert registry.settings.prompt == "C:\\temp\\ ${x"


# ---------------------------------------------------------------------------
# Save
# ---------------------------------------------------------------------------

class TestSave:
    """Tests for ConfigStore.save()."""

    def test_creates_file(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        store = ConfigStore(path)
        assert store.exists() is False

        store.save(_registry())

        assert store.exists() is True

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "sdb.cfg"
        ConfigStore(path).save(_registry())
        assert path.is_file()

    def test_one_record_per_element_in_order(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        ConfigStore(path).save(_registry())

        lines = path.read_text().splitlines()
        assert lines == [
            "verbose = false",
            'prompt = "(sdb) "',
            "timeout = 1000",
        ]

    def test_no_temporary_file_left_behind(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        ConfigStore(path).save(_registry())
        assert os.listdir(tmp_path) == [".sdb.cfg"]

    def test_overwrites_previous_content(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        path.write_text("verbose = true\n# stale\n")
        registry = _registry()

        ConfigStore(path).save(registry)

        assert "stale" not in path.read_text()
        assert "verbose = false" in path.read_text()

    def test_write_failure_raises_config_error(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        store = ConfigStore(path)

        with patch("sdbconfig.config.store.os.replace", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(ConfigError) as exc_info:
                store.save(_registry())

        assert "Permission denied" in str(exc_info.value)
        assert not path.exists()

    def test_encode_failure_raises_config_error(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        path.write_text("timeout = 5\n")
        store = ConfigStore(path)

        with patch.object(ConfigStore, "_render", return_value='prompt = "\ud800"\n'), \
                patch.object(ConfigStore, "_verify"):
            with pytest.raises(ConfigError):
                store.save(_registry())

        assert path.read_text() == "timeout = 5\n"
        assert os.listdir(tmp_path) == [".sdb.cfg"]

    def test_unreadable_text_is_not_written(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        path.write_text("timeout = 5\n")
        store = ConfigStore(path)

        with patch("hcl2.loads", side_effect=ValueError("unexpected token")):
            with pytest.raises(ConfigError) as exc_info:
                store.save(_registry())

        assert "would not be readable" in str(exc_info.value)
        assert path.read_text() == "timeout = 5\n"
        assert os.listdir(tmp_path) == [".sdb.cfg"]

    def test_value_that_reads_back_differently_is_not_written(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        registry = _registry()
        registry.resolve("prompt").set("mdb>")

        with patch.object(ConfigStore, "_format_value", return_value='"other"'):
            with pytest.raises(ConfigError) as exc_info:
                ConfigStore(path).save(registry)

        assert "cannot be stored" in str(exc_info.value)
        assert not path.exists()

    def test_file_is_ascii_utf8(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        registry = _registry()
        registry.resolve("prompt").set("héllo ☃ \U0001f41b")

        ConfigStore(path).save(registry)

        path.read_bytes().decode("ascii")

    def test_format_value(self):
        assert ConfigStore._format_value(SettingKind.BOOL, True) == "true"
        assert ConfigStore._format_value(SettingKind.INT, -3) == "-3"
        assert ConfigStore._format_value(SettingKind.STRING, 'say "hi"') == '"say \\"hi\\""'
        assert ConfigStore._format_value(SettingKind.STRING, "${HOME}") == '"\\u0024{HOME}"'
        assert ConfigStore._format_value(SettingKind.STRING, "100%{x} $5") == '"100\\u0025{x} $5"'
        assert ConfigStore._format_value(SettingKind.STRING, "a\\b\n") == '"a\\\\b\\n"'
        assert ConfigStore._format_value(SettingKind.STRING, "h\u00e9") == '"h\\u00e9"'


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------

class TestRoundTrip:
    """Values written by save() come back unchanged from load()."""

    def test_every_debugger_setting(self, tmp_path):
        path = tmp_path / ".sdb.cfg"
        source = SettingsRegistry(Settings())

        # Give every element a non-default value
        for descriptor in source.descriptors:
            if descriptor.kind is SettingKind.BOOL:
                descriptor.set(not descriptor.default)
            elif descriptor.kind is SettingKind.INT:
                descriptor.set(descriptor.default + 7)
            else:
                descriptor.set(descriptor.default + "x y")

        ConfigStore(path).save(source)

        target = SettingsRegistry(Settings())
        ConfigStore(path).load(target)

        assert target.settings == source.settings

    @pytest.mark.parametrize("value", [0, -1, -2147483648, 2147483647])
    def test_int_values(self, tmp_path, value):
        path = tmp_path / ".sdb.cfg"
        source = _registry()
        source.resolve("timeout").set(value)
        ConfigStore(path).save(source)

        target = _registry()
        ConfigStore(path).load(target)

        assert target.settings.timeout == value

    @pytest.mark.parametrize("value", [
        "",
        "(sdb) ",
        "> ",
        "C:/Program Files/Mono",
        "it's",
        'say "hi"',
        "${x",
        "%{x",
        "a ${ b",
        "%{if",
        "${HOME}",
        "$$ and %% {",
        "a\\b",
        "C:\\temp\\",
        "line1\nline2\ttab",
        "h\u00e9llo \u2603 \U0001f41b",
    ])
    def test_string_values(self, tmp_path, value):
        path = tmp_path / ".sdb.cfg"
        source = _registry()
        source.resolve("prompt").set(value)
        ConfigStore(path).save(source)

        target = _registry()
        ConfigStore(path).load(target)

        assert target.settings.prompt == value
