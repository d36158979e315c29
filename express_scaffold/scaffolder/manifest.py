"""Dependency-manifest patching."""

from __future__ import annotations

from .catalog import get_profile
from .models import DataAccessChoice, ProjectManifest


def patch_manifest(manifest: ProjectManifest, choice: DataAccessChoice) -> ProjectManifest:
    """Add the packages *choice* needs to *manifest* and return it.

    ``NONE`` leaves the manifest untouched.  Existing keys are overwritten
    (last write wins); version ranges are never merged.
    """
    if choice == DataAccessChoice.NONE:
        return manifest

    profile = get_profile(choice)
    manifest.dependencies.update(profile.dependencies)
    manifest.dev_dependencies.update(profile.dev_dependencies)
    return manifest


def rename_manifest(manifest: ProjectManifest, app_name: str) -> ProjectManifest:
    """Set the package name to the generated app's name."""
    manifest.name = app_name
    return manifest
