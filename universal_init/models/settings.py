"""Settings models for project scaffolding."""
import re
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_SCRIPTS: Dict[str, str] = {
    "start": "universal-scripts start",
    "build": "universal-scripts build",
    "test": "universal-scripts test",
    "serve": "node build/server/server.js",
    "lint": "eslint src",
    "heroku-postbuild": "npm run build",
}

DEFAULT_ENGINES: Dict[str, str] = {"node": ">=18"}

DEFAULT_TOOLING_DEPENDENCIES: Dict[str, str] = {"universal-scripts": "latest"}

DEFAULT_DOTFILES: List[str] = ["gitignore", "eslintrc", "prettierrc", "prettierignore"]

CUSTOM_TEMPLATE = "custom"


class TemplateChoice(BaseModel):
    """A named template offered in the selection menu."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    key: str = Field(..., description="Short identifier accepted by --template")
    label: str = Field(..., description="Text shown in the selection menu")
    package: str = Field(..., description="Template package fetched by the package manager")

    @field_validator('key')
    @classmethod
    def validate_key(cls, v):
        """Validate key is a lower-case slug."""
        if not re.match(r'^[a-z0-9][a-z0-9\-]*$', v):
            raise ValueError(
                f"Template key '{v}' must be a lower-case slug (letters, digits, hyphens)."
            )
        if v == CUSTOM_TEMPLATE:
            raise ValueError(f"Template key '{CUSTOM_TEMPLATE}' is reserved for manual entry.")
        return v

    @field_validator('package')
    @classmethod
    def validate_package(cls, v):
        """Validate package identifier is usable on a command line."""
        if not v or re.search(r'\s', v):
            raise ValueError(f"Template package '{v}' must be non-empty and contain no whitespace.")
        return v


BUILTIN_TEMPLATES: List[TemplateChoice] = [
    TemplateChoice(key="typescript", label="Typescript", package="cra-template-universal-ts"),
    TemplateChoice(key="javascript", label="Default JS", package="cra-template-universal"),
]


class InitSettings(BaseModel):
    """Everything a scaffolding run needs besides the operator's answers.

    Defaults reproduce the universal-scripts starter. A settings file may
    override any field.
    """

    model_config = ConfigDict(extra='forbid')

    templates: List[TemplateChoice] = Field(default_factory=lambda: list(BUILTIN_TEMPLATES))
    default_scripts: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SCRIPTS))
    engines: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ENGINES))
    tooling_dependencies: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_TOOLING_DEPENDENCIES)
    )
    dotfiles: List[str] = Field(default_factory=lambda: list(DEFAULT_DOTFILES))
    default_project_name: str = "my-app"

    @field_validator('dotfiles')
    @classmethod
    def validate_dotfiles(cls, v):
        """Dotfile templates are plain names that get a leading dot."""
        for name in v:
            if not name or name.startswith('.') or '/' in name or '\\' in name:
                raise ValueError(
                    f"Dotfile template '{name}' must be a plain file name without a leading dot."
                )
        return v

    @field_validator('default_project_name')
    @classmethod
    def validate_project_name(cls, v):
        if not v.strip() or '/' in v or '\\' in v:
            raise ValueError(f"Default project name '{v}' must be a plain directory name.")
        return v

    @model_validator(mode='after')
    def validate_unique_keys(self) -> 'InitSettings':
        """Template keys must not repeat."""
        seen = set()
        for choice in self.templates:
            if choice.key in seen:
                raise ValueError(f"Duplicate template key '{choice.key}'")
            seen.add(choice.key)
        return self

    def find_template(self, value: str) -> TemplateChoice | None:
        """Return the choice whose key, label or package matches ``value`` (case-insensitive)."""
        wanted = value.strip().lower()
        for choice in self.templates:
            if wanted in (choice.key, choice.label.lower(), choice.package.lower()):
                return choice
        return None
