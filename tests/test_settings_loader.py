"""Tests for settings loading and validation."""
import pytest
from pydantic import ValidationError

from universal_init.config.loader import CONFIG_ENV_VAR, SettingsLoader, find_config, load_settings
from universal_init.core.errors import SettingsError
from universal_init.models.settings import (
    BUILTIN_TEMPLATES,
    DEFAULT_DOTFILES,
    DEFAULT_SCRIPTS,
    InitSettings,
    TemplateChoice,
)


class TestFindConfig:
    """Test settings file lookup order."""

    def test_explicit_path_wins(self, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, "/from/env.yml")
        assert find_config("/explicit.yml") == "/explicit.yml"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, "/from/env.yml")
        assert find_config() == "/from/env.yml"

    def test_local_file(self, monkeypatch, temp_dir):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(temp_dir)
        (temp_dir / "universal-init.yml").write_text("default_project_name: web\n")

        assert find_config() == "./universal-init.yml"
        assert load_settings().default_project_name == "web"

    def test_nothing_found(self, monkeypatch, temp_dir):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(temp_dir)
        monkeypatch.setattr(
            "universal_init.config.loader.CONFIG_PATHS", ["./universal-init.yml"]
        )

        assert find_config() is None
        assert load_settings() == InitSettings()


class TestSettingsLoader:
    """Test YAML parsing and validation."""

    def test_defaults_without_file(self):
        settings = SettingsLoader(None).load()

        assert settings.templates == BUILTIN_TEMPLATES
        assert settings.default_scripts == DEFAULT_SCRIPTS
        assert settings.engines == {"node": ">=18"}
        assert settings.tooling_dependencies == {"universal-scripts": "latest"}
        assert settings.dotfiles == DEFAULT_DOTFILES
        assert settings.default_project_name == "my-app"

    def test_load_overrides(self, temp_dir):
        path = temp_dir / "settings.yml"
        path.write_text(
            """
templates:
  - key: react
    label: React SSR
    package: "@acme/cra-template-react"
engines:
  node: ">=20"
dotfiles:
  - gitignore
  - npmrc
"""
        )

        settings = SettingsLoader(str(path)).load()

        assert settings.templates == [
            TemplateChoice(key="react", label="React SSR", package="@acme/cra-template-react")
        ]
        assert settings.engines == {"node": ">=20"}
        assert settings.dotfiles == ["gitignore", "npmrc"]
        assert settings.default_scripts == DEFAULT_SCRIPTS

    def test_empty_file_gives_defaults(self, temp_dir):
        path = temp_dir / "settings.yml"
        path.write_text("")

        assert SettingsLoader(str(path)).load() == InitSettings()

    def test_missing_file(self, temp_dir):
        with pytest.raises(SettingsError, match="not found"):
            SettingsLoader(str(temp_dir / "nope.yml")).load()

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "settings.yml"
        path.write_text("templates: [unclosed\n")

        with pytest.raises(SettingsError, match="Cannot read"):
            SettingsLoader(str(path)).load()

    def test_not_a_mapping(self, temp_dir):
        path = temp_dir / "settings.yml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(SettingsError, match="mapping"):
            SettingsLoader(str(path)).load()

    def test_unknown_field(self, temp_dir):
        path = temp_dir / "settings.yml"
        path.write_text("colour: blue\n")

        with pytest.raises(SettingsError, match="Invalid settings"):
            SettingsLoader(str(path)).load()


class TestSettingsValidation:
    """Test pydantic validators."""

    def test_duplicate_template_keys(self):
        with pytest.raises(ValidationError, match="Duplicate template key"):
            InitSettings(templates=[
                TemplateChoice(key="a", label="A", package="pkg-a"),
                TemplateChoice(key="a", label="A again", package="pkg-b"),
            ])

    def test_reserved_custom_key(self):
        with pytest.raises(ValidationError, match="reserved"):
            TemplateChoice(key="custom", label="Custom", package="pkg")

    @pytest.mark.parametrize("key", ["Typescript", "has space", "-leading"])
    def test_invalid_key(self, key):
        with pytest.raises(ValidationError):
            TemplateChoice(key=key, label="X", package="pkg")

    def test_package_with_whitespace(self):
        with pytest.raises(ValidationError, match="whitespace"):
            TemplateChoice(key="x", label="X", package="two words")

    @pytest.mark.parametrize("name", [".gitignore", "dir/file", ""])
    def test_invalid_dotfile(self, name):
        with pytest.raises(ValidationError):
            InitSettings(dotfiles=[name])

    def test_invalid_project_name(self):
        with pytest.raises(ValidationError):
            InitSettings(default_project_name="a/b")

    def test_find_template(self):
        settings = InitSettings()
        assert settings.find_template("JAVASCRIPT").package == "cra-template-universal"
        assert settings.find_template("default js").key == "javascript"
        assert settings.find_template("unknown") is None
