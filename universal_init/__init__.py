"""universal-init - Scaffold universal-scripts projects from template packages."""

__all__ = ["__version__"]
__version__ = "0.1.0"
