"""package.json handling: loading, merging and writing manifests."""
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Protocol

from universal_init.core.errors import ManifestError
from universal_init.core.logger import get_logger
from universal_init.models.settings import InitSettings

logger = get_logger(__name__)

MANIFEST_FILE = "package.json"
TEMPLATE_INFO_FILE = "template.json"


class ManifestLoader(Protocol):
    """Anything that turns a path into a parsed JSON mapping."""

    def load(self, path: Path) -> Dict[str, Any]:
        ...


class JsonManifestLoader:
    """Reads manifests from disk."""

    def load(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ManifestError(f"Manifest not found: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise ManifestError(f"Cannot parse manifest {path}: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(f"Manifest {path} must contain a JSON object")
        return data


def template_package_section(template_info: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the ``package`` fragment a template declares, or an empty one."""
    section = template_info.get("package") or {}
    if not isinstance(section, dict):
        raise ManifestError("template.json 'package' entry must be an object")
    return section


def merge_manifest(
    app_manifest: Mapping[str, Any],
    template_info: Mapping[str, Any],
    settings: InitSettings,
) -> Dict[str, Any]:
    """Merge template scripts and fixed project fields into ``app_manifest``.

    Template scripts override the default scripts on key collisions. The
    engines constraint and the private flag are always set and ``main`` is
    always dropped. The input mapping is not modified.
    """
    template_package = template_package_section(template_info)

    merged = dict(app_manifest)
    merged["scripts"] = {
        **settings.default_scripts,
        **(template_package.get("scripts") or {}),
    }
    merged["engines"] = dict(settings.engines)
    merged["private"] = True
    merged.pop("main", None)
    return merged


def dependency_specs(dependencies: Mapping[str, str]) -> List[str]:
    """Format a dependency mapping as ``name@version`` tokens."""
    return [f"{name}@{version}" for name, version in dependencies.items()]


def runtime_dependencies(
    template_info: Mapping[str, Any], settings: InitSettings
) -> Dict[str, str]:
    """Template dependencies plus the fixed tooling dependencies."""
    template_package = template_package_section(template_info)
    return {
        **(template_package.get("dependencies") or {}),
        **settings.tooling_dependencies,
    }


def dev_dependencies(template_info: Mapping[str, Any]) -> Dict[str, str]:
    return dict(template_package_section(template_info).get("devDependencies") or {})


def write_manifest(path: Path, manifest: Mapping[str, Any]) -> None:
    """Replace the manifest at ``path`` wholesale."""
    path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.debug(f"Wrote {path}")
