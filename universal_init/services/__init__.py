"""Wrappers around external tools."""
from universal_init.services.package_manager import (
    PackageManager,
    PackageManagerFlavor,
    detect_package_manager,
)

__all__ = ['PackageManager', 'PackageManagerFlavor', 'detect_package_manager']
