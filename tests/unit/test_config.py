"""Tests for configuration loading and manager construction."""

import pytest

from iterman.core.config import Config, manager_from_config
from iterman.core.errors import ConfigurationError, SourceFaultError
from iterman.lists.base import EXHAUSTED, IterationPolicy
from iterman.lists.buffer_list import BufferList
from iterman.lists.memory_list import MemoryList

SAMPLE_CONFIG = """
[defaults]
encoding = "utf-8"

[logging]
level = "DEBUG"

[lists.subjects]
items = ["Hi again", "Since we last spoke"]
round_robin = true

[lists.recipients]
path = "recipients.txt"

[lists.landing_pages]
path = "pages"
"""


@pytest.fixture
def config_dir(tmp_path):
    """Directory holding a config file and the data it refers to."""
    (tmp_path / "iterman.toml").write_text(SAMPLE_CONFIG, encoding="utf-8")
    (tmp_path / "recipients.txt").write_text("a@x.com\nb@x.com\n", encoding="utf-8")
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "1.html").write_text("one", encoding="utf-8")
    (pages / "2.html").write_text("two", encoding="utf-8")
    return tmp_path


class TestConfig:
    """Test loading configuration."""

    def test_defaults(self):
        """Test configuration without a file."""
        config = Config(search=False)
        assert config.path is None
        assert config.get("defaults", "encoding") == "utf-8"
        assert config.get("defaults", "round_robin") is False
        assert config.lists == {}

    def test_load_explicit_path(self, config_dir):
        """Test loading a file and merging over defaults."""
        config = Config(config_dir / "iterman.toml")
        assert config.path == config_dir / "iterman.toml"
        assert config.get("logging", "level") == "DEBUG"
        assert config.get("logging", "file") == ""
        assert set(config.lists) == {"subjects", "recipients", "landing_pages"}

    def test_search_current_directory(self, config_dir, monkeypatch):
        """Test finding iterman.toml in the working directory."""
        monkeypatch.chdir(config_dir)
        config = Config()
        assert config.path is not None
        assert config.path.name == "iterman.toml"

    def test_missing_explicit_path(self, tmp_path):
        """Test that an explicit path must exist."""
        with pytest.raises(ConfigurationError):
            Config(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        """Test that parse errors become ConfigurationError."""
        path = tmp_path / "iterman.toml"
        path.write_text("[lists\nbroken", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            Config(path)

    def test_get_missing_key(self):
        """Test missing keys without a default."""
        config = Config(search=False)
        with pytest.raises(ConfigurationError):
            config.get("defaults", "nope")
        assert config.get("defaults", "nope", "fallback") == "fallback"

    @pytest.mark.parametrize("default", [False, 0, "", None])
    def test_get_falsy_default(self, default):
        """Test that falsy defaults are returned rather than raising."""
        assert Config(search=False).get("defaults", "nope", default) is default

    def test_get_missing_section(self):
        """Test missing sections."""
        with pytest.raises(ConfigurationError):
            Config(search=False).get_section("nope")


class TestValidate:
    """Test configuration validation."""

    def test_valid(self, config_dir):
        """Test that the sample validates."""
        Config(config_dir / "iterman.toml").validate()

    def test_bad_log_level(self):
        """Test unknown logging levels."""
        config = Config.from_dict({"logging": {"level": "LOUD"}})
        with pytest.raises(ConfigurationError):
            config.validate()

    @pytest.mark.parametrize(
        "declaration",
        [
            {},
            {"items": ["a"], "path": "x.txt"},
            {"items": "not-an-array"},
            {"items": ["a"], "round_robin": "yes"},
        ],
    )
    def test_bad_list_declarations(self, declaration):
        """Test malformed list tables."""
        config = Config.from_dict({"lists": {"broken": declaration}})
        with pytest.raises(ConfigurationError):
            config.validate()


class TestManagerFromConfig:
    """Test building a manager from configuration."""

    def test_builds_every_list(self, config_dir):
        """Test that each backend is chosen by its declaration."""
        manager = manager_from_config(Config(config_dir / "iterman.toml"))
        try:
            subjects = manager.get_list_by_name("subjects")
            assert isinstance(subjects, MemoryList)
            assert subjects.policy is IterationPolicy.ROUND_ROBIN
            assert [subjects.pull() for _ in range(3)] == [
                "Hi again",
                "Since we last spoke",
                "Hi again",
            ]

            recipients = manager.get_list_by_name("recipients")
            assert isinstance(recipients, BufferList)
            assert list(recipients) == ["a@x.com", "b@x.com"]

            assert list(manager.get_list_by_name("landing_pages")) == ["one", "two"]
        finally:
            manager.close()

    def test_base_dir_override(self, config_dir):
        """Test resolving relative paths against another directory."""
        config = Config.from_dict({"lists": {"r": {"path": "recipients.txt"}}})
        manager = manager_from_config(config, base_dir=config_dir)
        try:
            assert manager.pull("r") == "a@x.com"
        finally:
            manager.close()

    def test_default_round_robin(self):
        """Test the global round_robin default."""
        config = Config.from_dict(
            {"defaults": {"round_robin": True}, "lists": {"x": {"items": [1]}}}
        )
        manager = manager_from_config(config)
        assert [manager.pull("x") for _ in range(3)] == [1, 1, 1]

    def test_missing_path(self, tmp_path):
        """Test that a missing data file fails loudly."""
        config = Config.from_dict({"lists": {"r": {"path": "missing.txt"}}})
        with pytest.raises(SourceFaultError):
            manager_from_config(config, base_dir=tmp_path)

    def test_empty_items(self):
        """Test an empty inline list."""
        config = Config.from_dict({"lists": {"x": {"items": []}}})
        assert manager_from_config(config).pull("x") is EXHAUSTED
