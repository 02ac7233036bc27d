"""Package manager adapter for yarn and npm."""
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from universal_init.core.errors import PackageManagerError
from universal_init.core.logger import get_logger

logger = get_logger(__name__)


class PackageManagerFlavor(str, Enum):
    """Supported package managers."""

    YARN = "yarn"
    NPM = "npm"


# install, install-dev, remove
_COMMANDS = {
    PackageManagerFlavor.YARN: (["yarn", "add"], ["yarn", "add", "-D"], ["yarn", "remove"]),
    PackageManagerFlavor.NPM: (["npm", "install", "--save"], ["npm", "install", "-D"], ["npm", "uninstall"]),
}

# The manifest is always created by npm, even when yarn installs the packages
INIT_COMMAND = ["npm", "init", "-y"]


@dataclass(frozen=True)
class PackageManager:
    """A detected package manager and the commands derived from it."""

    flavor: PackageManagerFlavor

    @property
    def name(self) -> str:
        return self.flavor.value

    @property
    def install_command(self) -> List[str]:
        return list(_COMMANDS[self.flavor][0])

    @property
    def install_dev_command(self) -> List[str]:
        return list(_COMMANDS[self.flavor][1])

    @property
    def remove_command(self) -> List[str]:
        return list(_COMMANDS[self.flavor][2])

    @property
    def start_hint(self) -> str:
        return f"{self.name} start"

    def init(self, cwd: Path) -> None:
        """Create a package.json in ``cwd``."""
        run_command(INIT_COMMAND, cwd)

    def install(self, packages: Sequence[str], cwd: Path) -> None:
        """Install ``packages`` as runtime dependencies in one invocation."""
        run_command(self.install_command + list(packages), cwd)

    def install_dev(self, packages: Sequence[str], cwd: Path) -> None:
        """Install ``packages`` as dev dependencies in one invocation."""
        run_command(self.install_dev_command + list(packages), cwd)

    def remove(self, packages: Sequence[str], cwd: Path) -> None:
        """Remove ``packages`` from the project."""
        run_command(self.remove_command + list(packages), cwd)


def split_package_spec(spec: str) -> Tuple[str, Optional[str]]:
    """Split ``name@version`` into name and version, keeping npm scopes intact.

    >>> split_package_spec("@scope/pkg@1.2.0")
    ('@scope/pkg', '1.2.0')
    """
    spec = spec.strip()
    at = spec.rfind("@")
    if at <= 0:
        return spec, None
    return spec[:at], spec[at + 1:] or None


def run_command(cmd: List[str], cwd: Path) -> subprocess.CompletedProcess:
    """Run one package manager command with its output captured.

    Raises:
        PackageManagerError: If the command is missing or exits non-zero
    """
    command_line = " ".join(cmd)
    logger.debug(f"Running '{command_line}' in {cwd}")

    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise PackageManagerError(command_line) from e
    except subprocess.CalledProcessError as e:
        if e.stderr:
            logger.debug(f"Error output: {e.stderr}")
        raise PackageManagerError(command_line, e.returncode, e.stderr or "") from e

    if result.stdout:
        logger.debug(f"Output of '{command_line}': {result.stdout.strip()}")
    return result


def detect_package_manager(preferred: Optional[str] = None) -> PackageManager:
    """Pick yarn when it answers a version probe, otherwise npm.

    Args:
        preferred: Force a flavor ("yarn" or "npm") and skip the probe

    Returns:
        PackageManager for the rest of the run
    """
    if preferred:
        try:
            flavor = PackageManagerFlavor(preferred.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown package manager '{preferred}'. Use 'yarn' or 'npm'."
            ) from None
        logger.debug(f"Using requested package manager: {flavor.value}")
        return PackageManager(flavor)

    try:
        subprocess.run(
            ["yarn", "--version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=True,
        )
        flavor = PackageManagerFlavor.YARN
    except (subprocess.CalledProcessError, FileNotFoundError):
        flavor = PackageManagerFlavor.NPM

    logger.debug(f"Detected package manager: {flavor.value}")
    return PackageManager(flavor)
