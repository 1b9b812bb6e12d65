"""
Core functionality exports for rustydeps.

Importing from here keeps user-facing imports clean and stable:

    from rustydeps.core import ManifestReader, VersionResolver, render_table
"""

from __future__ import annotations

from rustydeps.core.classifier import classify
from rustydeps.core.outdated import filter_outdated
from rustydeps.core.renderer import render_table, render_version
from rustydeps.core.resolver import VersionResolver
from rustydeps.core.registry import CratesIndexClient, RegistryClient
from rustydeps.core.updater import UpdateExecutor, UpdateRequest, update_requests
from rustydeps.core.manifest import BareVersion, ManifestReader, TableWithVersion

__all__ = [
    "ManifestReader",
    "BareVersion",
    "TableWithVersion",
    "RegistryClient",
    "CratesIndexClient",
    "VersionResolver",
    "classify",
    "filter_outdated",
    "render_table",
    "render_version",
    "UpdateExecutor",
    "UpdateRequest",
    "update_requests",
]
