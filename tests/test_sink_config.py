"""Tests for sink configuration"""

import dataclasses
from datetime import timedelta
from pathlib import Path

import pytest

from logwriter_module import GB, KB, MB, RunningMode, SinkConfig


class TestRunningMode:
    """Test running mode functionality."""

    def test_values(self):
        assert RunningMode.DEBUG == 0
        assert RunningMode.PRODUCTION == 1

    def test_from_string(self):
        assert RunningMode.from_string("debug") == RunningMode.DEBUG
        assert RunningMode.from_string("PRODUCTION") == RunningMode.PRODUCTION

    def test_from_string_invalid(self):
        with pytest.raises(ValueError):
            RunningMode.from_string("verbose")

    def test_mirrors_console(self):
        assert RunningMode.DEBUG.mirrors_console
        assert not RunningMode.PRODUCTION.mirrors_console


class TestSinkConfig:
    """Test sink configuration."""

    def test_size_constants(self):
        assert KB == 1024
        assert MB == 1024 * 1024
        assert GB == 1024 * MB

    def test_default_config(self):
        config = SinkConfig.default()
        assert config.mode == RunningMode.PRODUCTION
        assert config.buffer_size == 0
        assert config.buffer_flush_interval == timedelta(0)
        assert config.hot_max_size == 0
        assert config.freeze_interval == timedelta(0)
        assert config.freeze_at_midnight is False
        assert config.hot_path == Path(".")
        assert config.cold_path == Path(".")
        assert not config.buffered
        assert not config.uses_timer

    def test_string_paths_converted(self):
        config = SinkConfig(hot_path="/var/log/app", cold_path="/var/log/app/arch")
        assert config.hot_path == Path("/var/log/app")
        assert config.cold_path == Path("/var/log/app/arch")

    def test_seconds_converted_to_timedelta(self):
        config = SinkConfig(buffer_flush_interval=0.5, freeze_interval=3600)
        assert config.buffer_flush_interval == timedelta(milliseconds=500)
        assert config.freeze_interval == timedelta(hours=1)

    def test_none_interval_disables(self):
        config = SinkConfig(freeze_interval=None)
        assert config.freeze_interval == timedelta(0)

    def test_mode_from_string_and_int(self):
        assert SinkConfig(mode="debug").mode is RunningMode.DEBUG
        assert SinkConfig(mode=1).mode is RunningMode.PRODUCTION

    def test_invalid_interval_type(self):
        with pytest.raises(TypeError):
            SinkConfig(freeze_interval="1h")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"buffer_size": -1},
            {"hot_max_size": -1},
            {"buffer_flush_interval": timedelta(seconds=-1)},
            {"freeze_interval": -5},
        ],
    )
    def test_negative_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            SinkConfig(**kwargs)

    def test_frozen(self):
        config = SinkConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.buffer_size = 10

    def test_uses_timer(self):
        assert SinkConfig(freeze_at_midnight=True).uses_timer
        assert SinkConfig(freeze_interval=60).uses_timer
        assert SinkConfig(buffer_size=KB, buffer_flush_interval=1).uses_timer
        assert not SinkConfig(buffer_flush_interval=1).uses_timer

    def test_debug_config(self):
        config = SinkConfig.debug_config(Path("/tmp/logs"))
        assert config.mode == RunningMode.DEBUG
        assert config.buffer_size == 0
        assert config.hot_path == Path("/tmp/logs")

    def test_production_config(self):
        config = SinkConfig.production_config(Path("/var/log"), Path("/mnt/arch"))
        assert config.mode == RunningMode.PRODUCTION
        assert config.buffered
        assert config.hot_max_size == 100 * MB
        assert config.freeze_at_midnight
        assert config.cold_path == Path("/mnt/arch")
