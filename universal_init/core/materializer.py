"""Copy template files into a new project."""
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from universal_init.core.errors import TemplateLayoutError
from universal_init.core.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RenameFailure:
    """A dotfile template that could not be renamed."""
    name: str
    reason: str


def template_package_dir(project_path: Path, template: str) -> Path:
    """Location of an installed template package inside the project."""
    return project_path / "node_modules" / template


def copy_template_files(source: Path, project_path: Path) -> None:
    """Copy the template tree into the project root, overwriting conflicts."""
    if not source.is_dir():
        raise TemplateLayoutError(f"Template package has no template directory: {source}")
    shutil.copytree(source, project_path, dirs_exist_ok=True)


def rename_dotfiles(project_path: Path, names: Iterable[str]) -> List[RenameFailure]:
    """Rename ``gitignore`` style templates to their dotfile form.

    Failures are logged and returned, never raised.
    """
    failures: List[RenameFailure] = []
    for name in names:
        source = project_path / name
        target = project_path / f".{name}"
        try:
            source.rename(target)
            logger.debug(f"Renamed {name} to .{name}")
        except OSError as e:
            reason = e.strerror or str(e)
            logger.debug(f"Could not rename {name} to .{name}: {reason}")
            failures.append(RenameFailure(name=name, reason=reason))
    return failures


def materialize_template(
    project_path: Path, template: str, dotfiles: Iterable[str]
) -> List[RenameFailure]:
    """Copy the installed template's files and fix up dotfile names."""
    source = template_package_dir(project_path, template) / "template"
    copy_template_files(source, project_path)
    return rename_dotfiles(project_path, dotfiles)
