# site_mirror/__init__.py
"""
SiteMirror package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

# Expose CLI entry point; ``site_mirror.cli`` stays the module
from site_mirror.cli import cli as main_cli  # noqa: E402
