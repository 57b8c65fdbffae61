"""
Tests for hook config loading.
"""

import pytest

from hookguard.config.loader import (
    clear_cache,
    get_config,
    list_configs,
    load_config,
    load_config_from_path,
    parse_config,
)


class TestBundledConfigs:

    def test_default_loads(self):
        """The default config enables conflict markers with doc suffixes."""
        config = load_config("default")
        assert config.name == "default"
        entry = config.get_hook("conflict_markers")
        assert entry is not None and entry.enabled
        assert entry.options["skip_suffixes"] == [".rst", ".markdown", ".md", ".rdoc"]
        assert config.settings.raise_errors is False

    def test_strict_checks_docs(self):
        config = load_config("strict")
        assert config.get_hook("conflict_markers").options["skip_suffixes"] == []

    def test_list_configs(self):
        assert {"default", "strict"} <= set(list_configs())

    def test_missing_config(self):
        with pytest.raises(FileNotFoundError):
            load_config("does_not_exist")

    def test_cache(self):
        clear_cache()
        first = get_config("default")
        assert get_config("default") is first
        assert get_config("default", use_cache=False) is not first


class TestParseConfig:

    def test_invalid_entries_skipped(self):
        """Entries without an id or with bad options are dropped."""
        config = parse_config({
            "hooks": [
                {"enabled": True},
                "conflict_markers",
                {"id": "conflict_markers", "options": ["not", "a", "mapping"]},
                {"id": "conflict_markers"},
            ],
        })
        assert [h.id for h in config.hooks] == ["conflict_markers"]
        assert config.hooks[0].options == {}

    def test_defaults(self):
        config = parse_config({}, default_name="empty")
        assert config.name == "empty"
        assert config.hooks == []
        assert config.get_enabled_hooks() == []
        assert not config.is_enabled("conflict_markers")

    def test_load_from_path(self, tmp_path):
        path = tmp_path / "team.yaml"
        path.write_text(
            "description: team hooks\n"
            "hooks:\n"
            "  - id: conflict_markers\n"
            "    enabled: false\n"
        )
        config = load_config_from_path(path)
        assert config.name == "team"
        assert config.description == "team hooks"
        assert not config.is_enabled("conflict_markers")

    def test_non_mapping_file_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError):
            load_config_from_path(path)
