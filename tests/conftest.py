"""Shared test fixtures for universal-init tests."""
import json
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest

from universal_init.core.manifest import JsonManifestLoader
from universal_init.models.settings import InitSettings
from universal_init.services.package_manager import split_package_spec

TS_TEMPLATE = "cra-template-universal-ts"

TS_TEMPLATE_INFO = {
    "package": {
        "scripts": {
            "test": "universal-scripts test --watchAll=false",
            "typecheck": "tsc --noEmit",
        },
        "dependencies": {"react": "^18.2.0", "react-dom": "^18.2.0"},
        "devDependencies": {"typescript": "^5.3.0"},
    }
}

TS_TEMPLATE_FILES = {
    "gitignore": "node_modules\nbuild\n",
    "eslintrc": "{}\n",
    "prettierrc": "{}\n",
    "prettierignore": "build\n",
    "src/index.tsx": "export default function App() { return null }\n",
    "README.md": "# Universal app\n",
}


class FakePackageManagerProcess:
    """Stands in for ``subprocess.run`` and behaves like npm/yarn on disk.

    ``npm init -y`` writes a package.json, installing a known template package
    writes its template tree and template.json into node_modules, and removal
    drops the entry from package.json again.
    """

    def __init__(self, templates: Optional[Dict[str, Dict[str, Any]]] = None):
        self.templates = templates if templates is not None else {
            TS_TEMPLATE: {"info": TS_TEMPLATE_INFO, "files": TS_TEMPLATE_FILES},
        }
        self.calls: List[List[str]] = []
        self.fail_on: Optional[str] = None
        self.skip_remove = False

    def __call__(self, cmd, cwd=None, **kwargs):
        cmd = list(cmd)
        self.calls.append(cmd)
        line = " ".join(cmd)
        if self.fail_on and self.fail_on in line:
            raise subprocess.CalledProcessError(1, cmd, output="", stderr=f"failed: {line}")

        project = Path(cwd) if cwd else None
        if cmd == ["npm", "init", "-y"]:
            self._write(project, {
                "name": project.name,
                "version": "1.0.0",
                "main": "index.js",
                "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
                "license": "ISC",
            })
        elif cmd[:2] in (["npm", "install"], ["yarn", "add"]):
            dev = "-D" in cmd
            for token in cmd[2:]:
                if token.startswith("-"):
                    continue
                self._install(project, token, dev)
        elif cmd[:2] in (["npm", "uninstall"], ["yarn", "remove"]) and not self.skip_remove:
            manifest = self._read(project)
            for token in cmd[2:]:
                for section in ("dependencies", "devDependencies"):
                    manifest.get(section, {}).pop(token, None)
            self._write(project, manifest)

        return Mock(returncode=0, stdout="", stderr="")

    def commands(self) -> List[str]:
        return [" ".join(call) for call in self.calls]

    def _install(self, project: Path, token: str, dev: bool) -> None:
        name, version = split_package_spec(token)
        if name in self.templates:
            package_dir = project / "node_modules" / name
            for relative, content in self.templates[name]["files"].items():
                target = package_dir / "template" / relative
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content)
            if self.templates[name]["info"] is not None:
                (package_dir / "template.json").write_text(json.dumps(self.templates[name]["info"]))

        manifest = self._read(project)
        section = "devDependencies" if dev else "dependencies"
        manifest.setdefault(section, {})[name] = version or "^1.0.0"
        self._write(project, manifest)

    @staticmethod
    def _read(project: Path) -> Dict[str, Any]:
        return json.loads((project / "package.json").read_text())

    @staticmethod
    def _write(project: Path, manifest: Dict[str, Any]) -> None:
        (project / "package.json").write_text(json.dumps(manifest, indent=2))


class FakeManifestLoader:
    """Serves template.json from memory and everything else from disk."""

    def __init__(self, template_info: Dict[str, Any]):
        self.template_info = template_info
        self.loaded: List[Path] = []
        self._disk = JsonManifestLoader()

    def load(self, path: Path) -> Dict[str, Any]:
        self.loaded.append(path)
        if path.name == "template.json":
            return json.loads(json.dumps(self.template_info))
        return self._disk.load(path)


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp:
        yield Path(temp)


@pytest.fixture
def settings():
    """Built-in default settings."""
    return InitSettings()


@pytest.fixture
def fake_process(monkeypatch):
    """Replace subprocess.run in the package manager adapter with a fake npm/yarn."""
    fake = FakePackageManagerProcess()
    monkeypatch.setattr(
        "universal_init.services.package_manager.subprocess.run", fake
    )
    return fake
