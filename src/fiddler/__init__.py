"""
Fiddler - component builds for monorepos

Fiddler scans a project tree for ``fiddler.json`` component manifests,
resolves the dependency graph between components and installed Composer
packages, and generates an autoload map for every component.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
