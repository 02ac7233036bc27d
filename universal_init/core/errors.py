"""Errors raised while scaffolding a project."""
from pathlib import Path
from typing import Optional


class InitError(Exception):
    """Base class for fatal scaffolding failures."""
    pass


class TargetExistsError(InitError):
    """Raised when the target project directory already exists."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"{path} already exists. Use another name.")


class TemplateInstallError(InitError):
    """Raised when the template package cannot be fetched."""

    def __init__(self, template: str, reason: str):
        self.template = template
        self.reason = reason
        super().__init__(f"Error installing template {template}: {reason}")


class ProjectDirectoryError(InitError):
    """Raised when the project directory cannot be created."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot create {path}: {reason}")


class TemplateLayoutError(InitError):
    """Raised when an installed template package has no template/ tree."""
    pass


class ManifestError(InitError):
    """Raised when a manifest cannot be read or parsed."""
    pass


class DependencyInstallError(InitError):
    """Raised when merged dependencies cannot be installed or the template removed."""
    pass


class PackageManagerError(Exception):
    """Raised when a package manager command fails."""

    def __init__(self, command: str, returncode: Optional[int] = None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            message = f"'{command}' could not be started"
        else:
            message = f"'{command}' exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class SettingsError(Exception):
    """Raised when the settings file is unreadable or invalid."""
    pass
