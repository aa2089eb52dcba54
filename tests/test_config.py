"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from spectrace.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    LOCAL_CONFIG_FILENAME,
    ConfigError,
    ConfigLoader,
    find_config_file,
    find_git_root,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
)
from spectrace.core.models import ArtifactKind
from spectrace.core.rules import TraceabilityRulesConfig


@pytest.fixture
def repo(tmp_path):
    """A fake git checkout rooted at tmp_path."""
    (tmp_path / ".git").mkdir()
    return tmp_path


def write_config(directory: Path, content: str, name: str = CONFIG_FILENAME) -> Path:
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


class TestConfigLoader:
    def test_dotted_get(self):
        config = ConfigLoader.from_dict({"traceability": {"directories": {"tasks": "todo"}}})

        assert config.get("traceability.directories.tasks") == "todo"
        assert config.get("traceability.missing", "fallback") == "fallback"
        assert config.get("traceability.directories.tasks.deeper") is None

    def test_get_bool(self):
        config = ConfigLoader.from_dict({"traceability": {"strict": True}})

        assert config.get_bool("traceability.strict") is True
        assert config.get_bool("traceability.missing") is False

    @pytest.mark.parametrize("value", ["0", "no", "off", 1, ""])
    def test_get_bool_rejects_non_booleans(self, value):
        config = ConfigLoader.from_dict({"traceability": {"strict": value}})

        with pytest.raises(ConfigError, match="traceability.strict must be true or false"):
            config.get_bool("traceability.strict")

    def test_section(self):
        config = ConfigLoader.from_dict({"traceability": {"strict": True}, "flat": 1})

        assert config.section("traceability") == {"strict": True}
        assert config.section("flat") == {}
        assert config.section("absent") == {}

    def test_to_dict_is_a_copy(self):
        data = {"traceability": {"strict": False}}
        config = ConfigLoader.from_dict(data)

        config.to_dict()["traceability"]["strict"] = True

        assert config.get("traceability.strict") is False


class TestParseToml:
    def test_plain_containers(self):
        data = parse_toml('[traceability]\nstrict = true\ncompleted_statuses = ["done"]\n')

        assert data == {"traceability": {"strict": True, "completed_statuses": ["done"]}}
        assert type(data["traceability"]) is dict

    def test_invalid_toml(self):
        with pytest.raises(ConfigError, match="Invalid TOML"):
            parse_toml("[traceability\nstrict = ")


class TestMergeConfigs:
    def test_nested_merge(self):
        base = {"traceability": {"strict": False, "directories": {"tasks": "tasks"}}}
        override = {"traceability": {"directories": {"tasks": "todo"}}}

        merged = merge_configs(base, override)

        assert merged == {"traceability": {"strict": False, "directories": {"tasks": "todo"}}}
        assert base["traceability"]["directories"]["tasks"] == "tasks"

    def test_lists_replace(self):
        merged = merge_configs({"a": {"l": [1, 2]}}, {"a": {"l": [3]}})

        assert merged == {"a": {"l": [3]}}


class TestFindConfigFile:
    def test_found_in_parent(self, repo):
        config_path = write_config(repo, "")
        nested = repo / "docs" / "specs"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == config_path.resolve()

    def test_stops_at_git_root(self, tmp_path):
        write_config(tmp_path, "")
        checkout = tmp_path / "checkout"
        (checkout / ".git").mkdir(parents=True)

        assert find_config_file(checkout) is None

    def test_git_file_marks_root(self, tmp_path):
        (tmp_path / ".git").write_text("gitdir: elsewhere\n")

        assert find_git_root(tmp_path) == tmp_path.resolve()


class TestLoadConfig:
    def test_overrides_defaults(self, repo):
        path = write_config(repo, '[traceability]\nspecs_path = "docs/specs"\n')

        config = load_config(path)

        assert config.path == path
        assert config.get("traceability.specs_path") == "docs/specs"
        assert config.get("traceability.format") == "console"
        assert config.get("traceability.directories.designs") == "design"

    def test_local_file_merged(self, repo):
        path = write_config(repo, "[traceability]\nstrict = false\n")
        write_config(repo, "[traceability]\nstrict = true\n", name=LOCAL_CONFIG_FILENAME)

        assert load_config(path).get("traceability.strict") is True

    def test_env_overrides(self, repo, monkeypatch):
        path = write_config(repo, '[traceability]\nspecs_path = "docs/specs"\n')
        monkeypatch.setenv("SPECTRACE_TRACEABILITY_SPECS_PATH", "other/specs")
        monkeypatch.setenv("SPECTRACE_TRACEABILITY_STRICT", "TRUE")
        monkeypatch.setenv("SPECTRACE_TRACEABILITY_COMPLETED_STATUSES", '["shipped"]')

        config = load_config(path)

        assert config.get("traceability.specs_path") == "other/specs"
        assert config.get("traceability.strict") is True
        assert config.get("traceability.completed_statuses") == ["shipped"]

    def test_malformed_env_json_kept_as_string(self, repo, monkeypatch):
        path = write_config(repo, "")
        monkeypatch.setenv("SPECTRACE_TRACEABILITY_FORMAT", "[oops")

        assert load_config(path).get("traceability.format") == "[oops"

    def test_invalid_file(self, repo):
        path = write_config(repo, "not = [valid")

        with pytest.raises(ConfigError, match=CONFIG_FILENAME):
            load_config(path)


class TestGetConfig:
    def test_defaults_without_file(self, repo):
        assert get_config(start_path=repo) == DEFAULT_CONFIG

    def test_defaults_not_mutated_by_env(self, repo, monkeypatch):
        monkeypatch.setenv("SPECTRACE_TRACEABILITY_STRICT", "true")

        assert get_config(start_path=repo)["traceability"]["strict"] is True
        assert DEFAULT_CONFIG["traceability"]["strict"] is False

    def test_discovered_file(self, repo):
        write_config(repo, '[traceability]\nformat = "markdown"\n')

        assert get_config(start_path=repo)["traceability"]["format"] == "markdown"

    def test_explicit_path(self, repo):
        path = write_config(repo, '[traceability]\nformat = "json"\n', name="custom.toml")

        assert get_config(path, start_path=repo)["traceability"]["format"] == "json"

    def test_explicit_path_missing(self, repo):
        with pytest.raises(ConfigError, match="Config file not found"):
            get_config(repo / "missing.toml")


class TestTraceabilityRulesConfigFromConfig:
    def test_from_default_section(self):
        rules = TraceabilityRulesConfig.from_dict(DEFAULT_CONFIG["traceability"])

        assert rules.requirement_prefix == "REQ-"
        assert rules.directories[ArtifactKind.DESIGN] == "design"
        assert rules.patterns[ArtifactKind.TASK] == "TASK-*.md"
        assert rules.is_completed("Implemented")

    def test_from_loaded_file(self, repo):
        path = write_config(
            repo,
            '[traceability]\ncompleted_statuses = ["Shipped"]\n\n'
            '[traceability.directories]\ndesigns = "designs"\n\n'
            '[traceability.prefixes]\ndesign = "DSN-"\n',
        )

        rules = TraceabilityRulesConfig.from_dict(load_config(path).section("traceability"))

        assert rules.completed_statuses == ["shipped"]
        assert rules.directories[ArtifactKind.DESIGN] == "designs"
        assert rules.directories[ArtifactKind.TASK] == "tasks"
        assert rules.design_prefix == "DSN-"

    def test_plain_string_statuses_from_env_rejected(self, repo, monkeypatch):
        path = write_config(repo, "")
        monkeypatch.setenv("SPECTRACE_TRACEABILITY_COMPLETED_STATUSES", "done")

        section = load_config(path).section("traceability")

        with pytest.raises(ConfigError, match="must be a list of strings"):
            TraceabilityRulesConfig.from_dict(section)
