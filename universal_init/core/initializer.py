"""Project initialization: fetch a template package and turn it into a project."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from universal_init.core.errors import (
    DependencyInstallError,
    PackageManagerError,
    ProjectDirectoryError,
    TargetExistsError,
    TemplateInstallError,
)
from universal_init.core.logger import get_logger
from universal_init.core.manifest import (
    MANIFEST_FILE,
    TEMPLATE_INFO_FILE,
    JsonManifestLoader,
    ManifestLoader,
    dependency_specs,
    dev_dependencies,
    merge_manifest,
    runtime_dependencies,
    write_manifest,
)
from universal_init.core.materializer import (
    RenameFailure,
    materialize_template,
    template_package_dir,
)
from universal_init.models.settings import InitSettings
from universal_init.services.package_manager import PackageManager, split_package_spec

logger = get_logger(__name__)


@dataclass
class InitResult:
    """Outcome of a completed initialization."""
    project_path: Path
    template: str
    package_manager: PackageManager
    manifest: Dict[str, Any]
    rename_failures: List[RenameFailure] = field(default_factory=list)


def ensure_target_available(project_path: Path) -> None:
    """Fail before any prompt or mutation when the target already exists."""
    if project_path.exists():
        raise TargetExistsError(project_path)


class ProjectInitializer:
    """Runs the scaffolding phases after a template has been selected."""

    def __init__(
        self,
        settings: InitSettings,
        package_manager: PackageManager,
        loader: Optional[ManifestLoader] = None,
    ):
        self.settings = settings
        self.package_manager = package_manager
        self.loader = loader or JsonManifestLoader()

    def run(
        self,
        project_path: Path,
        template: str,
        version: Optional[str] = None,
    ) -> InitResult:
        """Create ``project_path`` from the ``template`` package.

        Args:
            project_path: Directory to create (must not exist)
            template: Template package identifier, optionally ``name@version``
            version: Version to request when ``template`` carries none

        Returns:
            InitResult with the final manifest and any dotfile rename failures
        """
        template_name, spec_version = split_package_spec(template)
        version = spec_version or version

        ensure_target_available(project_path)
        try:
            project_path.mkdir(parents=True)
        except OSError as e:
            raise ProjectDirectoryError(project_path, e.strerror or str(e)) from e
        logger.debug(f"Created {project_path}")

        self.install_template(project_path, template_name, version)

        logger.info("📂 Copying template files...")
        rename_failures = materialize_template(
            project_path, template_name, self.settings.dotfiles
        )

        template_info = self.loader.load(
            template_package_dir(project_path, template_name) / TEMPLATE_INFO_FILE
        )
        manifest = self.merge_manifest(project_path, template_info)

        self.install_dependencies(project_path, template_info)
        manifest = self.remove_template(project_path, template_name)

        return InitResult(
            project_path=project_path,
            template=template_name,
            package_manager=self.package_manager,
            manifest=manifest,
            rename_failures=rename_failures,
        )

    def install_template(
        self, project_path: Path, template: str, version: Optional[str] = None
    ) -> None:
        """Create the manifest and fetch the template package.

        Raises:
            TemplateInstallError: If either package manager call fails
        """
        spec = f"{template}@{version}" if version else template
        logger.info(f"📥 Installing template {spec} with {self.package_manager.name}...")
        try:
            self.package_manager.init(project_path)
            self.package_manager.install([spec], project_path)
        except PackageManagerError as e:
            raise TemplateInstallError(spec, str(e)) from e

    def merge_manifest(
        self, project_path: Path, template_info: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """Merge template metadata into package.json and write it back."""
        manifest_path = project_path / MANIFEST_FILE
        app_manifest = self.loader.load(manifest_path)
        merged = merge_manifest(app_manifest, template_info, self.settings)
        write_manifest(manifest_path, merged)
        return merged

    def install_dependencies(
        self, project_path: Path, template_info: Mapping[str, Any]
    ) -> None:
        """Install the template's dependencies plus the tooling dependencies.

        Raises:
            DependencyInstallError: If an install command fails
        """
        deps = dependency_specs(runtime_dependencies(template_info, self.settings))
        dev_deps = dependency_specs(dev_dependencies(template_info))

        try:
            if deps:
                logger.info("📥 Installing dependencies...")
                self.package_manager.install(deps, project_path)
            else:
                logger.info("🔹 Template has no dependencies; skipping install...")
                logger.debug(f"Template info: {dict(template_info)}")

            if dev_deps:
                logger.info("📥 Installing dev dependencies...")
                self.package_manager.install_dev(dev_deps, project_path)
            else:
                logger.info("🔹 Template has no dev dependencies; skipping install...")
                logger.debug(f"Template info: {dict(template_info)}")
        except PackageManagerError as e:
            raise DependencyInstallError(f"Error installing dependencies: {e}") from e

    def remove_template(self, project_path: Path, template: str) -> Dict[str, Any]:
        """Uninstall the template package and make sure the manifest no longer lists it.

        Returns:
            The final manifest

        Raises:
            DependencyInstallError: If the remove command fails
        """
        logger.info("🧹 Removing template dependency...")
        try:
            self.package_manager.remove([template], project_path)
        except PackageManagerError as e:
            raise DependencyInstallError(f"Error removing template {template}: {e}") from e

        manifest_path = project_path / MANIFEST_FILE
        manifest = self.loader.load(manifest_path)
        dependencies = manifest.get("dependencies") or {}
        if template in dependencies:
            logger.warning(f"{template} still listed in {MANIFEST_FILE}; dropping it")
            manifest["dependencies"] = {
                name: version for name, version in dependencies.items() if name != template
            }
            write_manifest(manifest_path, manifest)
        return manifest
