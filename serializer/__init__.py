"""Serializer module rendering package descriptors as manifests."""

from .package_string_provider import (
    DEFAULT_SWIFT_TOOLS_VERSION,
    PackageStringProvider,
    package_dependency_sort_key,
    render_package,
)

__all__ = [
    "DEFAULT_SWIFT_TOOLS_VERSION",
    "PackageStringProvider",
    "package_dependency_sort_key",
    "render_package",
]
