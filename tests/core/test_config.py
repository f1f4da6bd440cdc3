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
"""Tests for Config loading, env overrides, placeholders and binding."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from flycors.core.config import Config, config_properties
from flycors.kernel.exceptions import ConfigurationException


class TestConfigGet:
    def test_get_simple_value(self):
        config = Config({"app": {"name": "cors-demo", "port": 8080}})
        assert config.get("app.name") == "cors-demo"
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_get_through_non_dict_returns_default(self):
        config = Config({"app": "flat"})
        assert config.get("app.name", "x") == "x"

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("FLYCORS_CORS_DEFAULT_POLICY_NAME", "from-env")
        config = Config({"flycors": {"cors": {"default-policy-name": "from-file"}}})
        assert config.get("flycors.cors.default-policy-name") == "from-env"

    def test_to_dict_is_a_copy(self):
        config = Config({"a": 1})
        data = config.to_dict()
        data["b"] = 2
        assert config.get("b") is None

    def test_get_section(self):
        config = Config({"flycors": {"cors": {"policies": {"web": {}}}}})
        assert config.get_section("flycors.cors") == {"policies": {"web": {}}}
        assert config.get_section("flycors.missing") == {}


class TestConfigFromFile:
    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "flycors.yaml"
        config_file.write_text("flycors:\n  cors:\n    default-policy-name: web\n")

        config = Config.from_file(config_file)

        assert config.get("flycors.cors.default-policy-name") == "web"
        assert config.loaded_sources == [str(config_file)]

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "flycors.toml"
        config_file.write_text('[flycors.cors.policies.web]\norigins = ["https://a.example.com"]\n')

        config = Config.from_file(config_file)

        assert config.get("flycors.cors.policies.web.origins") == ["https://a.example.com"]

    def test_missing_file_gives_empty_config(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "flycors.yaml")
        assert config.to_dict() == {}
        assert config.loaded_sources == []

    def test_empty_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "flycors.yaml"
        config_file.write_text("")
        assert Config.from_file(config_file).to_dict() == {}


class TestProfileConfigMerging:
    def test_merge_profile_config(self, tmp_path: Path):
        base = tmp_path / "flycors.yaml"
        base.write_text("cors:\n  max-age: 600\n  origin: https://a.example.com\n")
        (tmp_path / "flycors-dev.yaml").write_text("cors:\n  max-age: 5\n  debug: true\n")

        config = Config.from_file(base, active_profiles=["dev"])

        assert config.get("cors.max-age") == 5
        assert config.get("cors.origin") == "https://a.example.com"
        assert config.get("cors.debug") is True
        assert config.loaded_sources[-1].endswith("(profile: dev)")

    def test_later_profile_wins(self, tmp_path: Path):
        base = tmp_path / "flycors.yaml"
        base.write_text("db:\n  url: base\n")
        (tmp_path / "flycors-dev.yaml").write_text("db:\n  url: dev-url\n")
        (tmp_path / "flycors-local.yaml").write_text("db:\n  url: local-url\n")

        config = Config.from_file(base, active_profiles=["dev", "local"])
        assert config.get("db.url") == "local-url"

    def test_missing_profile_file_is_skipped(self, tmp_path: Path):
        base = tmp_path / "flycors.yaml"
        base.write_text("app:\n  name: test\n")

        config = Config.from_file(base, active_profiles=["nonexistent"])
        assert config.get("app.name") == "test"
        assert len(config.loaded_sources) == 1


class TestPlaceholderResolution:
    def test_resolve_env_var(self, monkeypatch):
        monkeypatch.setenv("APP_ORIGIN", "https://app.example.com")
        config = Config({"origin": "${APP_ORIGIN}"})
        assert config.get("origin") == "https://app.example.com"

    def test_resolve_config_reference(self):
        config = Config({"host": "app.example.com", "origin": "https://${host}"})
        assert config.get("origin") == "https://app.example.com"

    def test_resolve_with_default(self):
        config = Config({"key": "${MISSING_FLYCORS_VAR:fallback}"})
        assert config.get("key") == "fallback"

    def test_resolve_nested(self):
        config = Config({"base": "localhost", "host": "${base}", "url": "http://${host}:8080"})
        assert config.get("url") == "http://localhost:8080"

    def test_unresolvable_placeholder(self):
        config = Config({"key": "${NOT_SET_ANYWHERE_FLYCORS}"})
        with pytest.raises(ConfigurationException) as exc_info:
            config.get("key")
        assert exc_info.value.code == "CONFIG_PLACEHOLDER_UNRESOLVED"

    def test_max_recursion_guard(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ConfigurationException, match="[Mm]ax.*recursion"):
            config.get("a")


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="demo")
        @dataclass
        class DemoProperties:
            name: str = "default"
            retries: int = 1
            enabled: bool = False

        config = Config({"demo": {"name": "custom", "retries": "3", "enabled": "yes"}})
        props = config.bind(DemoProperties)

        assert props.name == "custom"
        assert props.retries == 3
        assert props.enabled is True

    def test_bind_uses_defaults(self):
        @config_properties(prefix="demo")
        @dataclass
        class DemoProperties:
            name: str = "default"

        assert Config({}).bind(DemoProperties).name == "default"

    def test_bind_applies_env_override(self, monkeypatch):
        @config_properties(prefix="flycors.demo")
        @dataclass
        class DemoProperties:
            name: str = "default"
            retries: int = 1

        monkeypatch.setenv("FLYCORS_DEMO_NAME", "from-env")
        monkeypatch.setenv("FLYCORS_DEMO_RETRIES", "7")
        props = Config({"flycors": {"demo": {"name": "from-file"}}}).bind(DemoProperties)

        assert props.name == "from-env"
        assert props.retries == 7

    def test_bind_resolves_placeholders(self, monkeypatch):
        @config_properties(prefix="demo")
        @dataclass
        class DemoProperties:
            url: str = ""
            hosts: list = None  # type: ignore[assignment]

        monkeypatch.setenv("DEMO_HOST", "db.example.com")
        config = Config({"demo": {"url": "postgres://${DEMO_HOST}/app", "hosts": ["${DEMO_HOST}", "plain"]}})

        props = config.bind(DemoProperties)

        assert props.url == "postgres://db.example.com/app"
        assert props.hosts == ["db.example.com", "plain"]

    def test_bind_unresolvable_placeholder_raises(self):
        @config_properties(prefix="demo")
        @dataclass
        class DemoProperties:
            url: str = ""

        with pytest.raises(ConfigurationException):
            Config({"demo": {"url": "${NOT_SET_ANYWHERE_FLYCORS}"}}).bind(DemoProperties)

    def test_bind_undecorated_class_raises(self):
        @dataclass
        class Plain:
            name: str = "x"

        with pytest.raises(ConfigurationException, match="not decorated"):
            Config({}).bind(Plain)
