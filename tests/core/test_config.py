# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for Config: files, defaults, env overrides, placeholders, binding."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest
from pydantic import BaseModel, Field

from pyhelmet.config.properties.server import ServerProperties
from pyhelmet.core.config import Config, config_properties


class TestConfigGet:
    def test_dot_notation(self):
        config = Config({"pyhelmet": {"server": {"host": "0.0.0.0"}}})
        assert config.get("pyhelmet.server.host") == "0.0.0.0"

    def test_missing_key_returns_default(self):
        assert Config({}).get("pyhelmet.nothing", "fallback") == "fallback"

    def test_false_is_a_value(self):
        config = Config({"pyhelmet": {"helmet": {"hsts": False}}})
        assert config.get("pyhelmet.helmet.hsts", True) is False

    def test_env_var_overrides_file_value(self, monkeypatch):
        monkeypatch.setenv("PYHELMET_SERVER_PORT", "9999")
        config = Config({"pyhelmet": {"server": {"port": 8080}}})
        assert config.get("pyhelmet.server.port") == "9999"

    def test_placeholder_with_default(self, monkeypatch):
        monkeypatch.delenv("HELMET_TEST_UNSET", raising=False)
        config = Config({"app": {"server": "${HELMET_TEST_UNSET:edge}"}})
        assert config.get("app.server") == "edge"

    def test_placeholder_from_env(self, monkeypatch):
        monkeypatch.setenv("HELMET_TEST_SERVER", "gateway")
        config = Config({"app": {"server": "${HELMET_TEST_SERVER}"}})
        assert config.get("app.server") == "gateway"

    def test_placeholder_config_reference(self):
        config = Config({"app": {"name": "shop", "server": "${app.name}-edge"}})
        assert config.get("app.server") == "shop-edge"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"app": {"server": "${HELMET_TEST_MISSING_REF}"}})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("app.server")

    def test_get_section(self):
        config = Config({"pyhelmet": {"helmet": {"hsts": False, "xFrameOptions": {"action": "DENY"}}}})
        assert config.get_section("pyhelmet.helmet") == {"hsts": False, "xFrameOptions": {"action": "DENY"}}

    def test_get_section_missing_is_empty(self):
        assert Config({}).get_section("pyhelmet.helmet") == {}


class TestConfigFromFile:
    def test_defaults_loaded_without_file(self):
        config = Config.from_file(None)
        assert config.get("pyhelmet.server.port") == 8080
        assert config.get_section("pyhelmet.helmet") == {}
        assert config.loaded_sources == ["pyhelmet-defaults.yaml (defaults)"]

    def test_yaml_file_merges_over_defaults(self, tmp_path: Path):
        path = tmp_path / "pyhelmet.yaml"
        path.write_text(
            "pyhelmet:\n"
            "  server:\n"
            "    port: 9000\n"
            "  helmet:\n"
            "    xPoweredBy:\n"
            "      serverValue: null\n"
        )
        config = Config.from_file(path)
        assert config.get("pyhelmet.server.port") == 9000
        assert config.get("pyhelmet.server.host") == "127.0.0.1"
        assert config.get_section("pyhelmet.helmet") == {"xPoweredBy": {"serverValue": None}}

    def test_toml_file(self, tmp_path: Path):
        path = tmp_path / "pyhelmet.toml"
        path.write_text('[pyhelmet.helmet]\nhsts = false\n')
        config = Config.from_file(path)
        assert config.get_section("pyhelmet.helmet") == {"hsts": False}

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "pyhelmet.yaml").write_text("pyhelmet:\n  server:\n    port: 9000\n")
        (tmp_path / "pyhelmet-prod.yaml").write_text("pyhelmet:\n  server:\n    port: 443\n")
        config = Config.from_file(tmp_path / "pyhelmet.yaml", active_profiles=["prod"])
        assert config.get("pyhelmet.server.port") == 443
        assert len(config.loaded_sources) == 3

    def test_without_defaults(self, tmp_path: Path):
        path = tmp_path / "pyhelmet.yaml"
        path.write_text("pyhelmet:\n  helmet: {}\n")
        config = Config.from_file(path, load_defaults=False)
        assert config.get("pyhelmet.server.port") is None


class TestConfigBind:
    def test_bind_dataclass_defaults(self):
        server = Config.from_file(None).bind(ServerProperties)
        assert server.host == "127.0.0.1"
        assert server.port == 8080

    def test_bind_coerces_env_strings(self, monkeypatch):
        monkeypatch.setenv("PYHELMET_SERVER_PORT", "9090")
        server = Config({}).bind(ServerProperties)
        assert server.port == 9090

    def test_bind_undecorated_raises(self):
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)

    def test_bind_pydantic_model(self):
        @config_properties(prefix="app.limits")
        class Limits(BaseModel):
            max_age: int = Field(default=10, ge=0)

        assert Config({"app": {"limits": {"max_age": 30}}}).bind(Limits).max_age == 30

    def test_bind_pydantic_validation_error(self):
        @config_properties(prefix="app.limits")
        class Limits(BaseModel):
            max_age: int = Field(default=10, ge=0)

        with pytest.raises(ValueError, match="Configuration validation failed"):
            Config({"app": {"limits": {"max_age": -1}}}).bind(Limits)
