"""Manifest Serializer - renders a SwiftPackage descriptor as Package.swift text.

Rendering is a pure function of the descriptor's content: products,
package dependencies, targets and each target's dependencies are sorted
right before emission, so two descriptors differing only in insertion
order render to identical text. Names are inserted literally.
"""

from typing import List

from contracts import (
    IOSVersion,
    LibraryProduct,
    LibraryType,
    MacOSVersion,
    ModulePackageDependency,
    RemotePackageDependency,
    SwiftPackage,
    Target,
    TargetDependency,
    VersionKind,
)


DEFAULT_SWIFT_TOOLS_VERSION = "5.6"

_INDENT = "    "


def package_dependency_sort_key(dependency) -> tuple:
    """Path modules before remote urls, then alphabetical."""
    match dependency:
        case ModulePackageDependency(path=path, name=name):
            return (0, path, name)
        case RemotePackageDependency(url=url):
            return (1, url, "")
    raise TypeError(f"Unknown package dependency: {type(dependency).__name__}")


class PackageStringProvider:
    """Renders Swift Package Manager manifests."""

    def __init__(self, swift_tools_version: str = DEFAULT_SWIFT_TOOLS_VERSION):
        self.swift_tools_version = swift_tools_version

    def string(self, package: SwiftPackage) -> str:
        """Render `package` as manifest text.

        Args:
            package: Descriptor to render; it is not modified

        Returns:
            Manifest text ending with a newline
        """
        lines = [
            f"// swift-tools-version:{self.swift_tools_version}",
            "// The swift-tools-version declares the minimum version of Swift required to build this package.",
            "",
            "import PackageDescription",
            "",
            "let package = Package(",
            f'{_INDENT}name: "{package.name}",',
        ]

        if package.ios_version is not None or package.macos_version is not None:
            lines.append(f"{_INDENT}platforms: [")
            if package.ios_version is not None:
                lines.append(f"{_INDENT * 2}{self.ios_platform_string(package.ios_version)},")
            if package.macos_version is not None:
                lines.append(f"{_INDENT * 2}{self.macos_platform_string(package.macos_version)},")
            lines.append(f"{_INDENT}],")

        lines.append(f"{_INDENT}products: [")
        for product in sorted(package.products, key=lambda p: p.name):
            lines.extend(self.product_lines(product))
        lines.append(f"{_INDENT}],")

        lines.append(f"{_INDENT}dependencies: [")
        for dependency in sorted(package.dependencies, key=package_dependency_sort_key):
            lines.append(f"{_INDENT * 2}{self.package_dependency_string(dependency)},")
        lines.append(f"{_INDENT}],")

        lines.append(f"{_INDENT}targets: [")
        for target in sorted(package.targets, key=lambda t: (t.name, t.is_test)):
            lines.extend(self.target_lines(target))
        lines.append(f"{_INDENT}]")
        lines.append(")")

        return "\n".join(lines) + "\n"

    def product_lines(self, product: LibraryProduct) -> List[str]:
        lines = [
            f"{_INDENT * 2}.library(",
            f'{_INDENT * 3}name: "{product.name}",',
        ]
        if product.type in (LibraryType.STATIC, LibraryType.DYNAMIC):
            lines.append(f"{_INDENT * 3}type: .{product.type.value},")
        targets = ", ".join(f'"{name}"' for name in sorted(product.targets))
        lines.append(f"{_INDENT * 3}targets: [{targets}]),")
        return lines

    def package_dependency_string(self, dependency) -> str:
        match dependency:
            case ModulePackageDependency(path=path):
                return f'.package(path: "{path}")'
            case RemotePackageDependency(url=url, version=version):
                if version.kind == VersionKind.EXACT:
                    requirement = f'exact: "{version.value}"'
                elif version.kind == VersionKind.BRANCH:
                    requirement = f'branch: "{version.value}"'
                else:
                    requirement = f'from: "{version.value}"'
                return f'.package(url: "{url}", {requirement})'
        raise TypeError(f"Unknown package dependency: {type(dependency).__name__}")

    def target_dependency_string(self, dependency: TargetDependency) -> str:
        if dependency.package:
            return f'.product(name: "{dependency.name}", package: "{dependency.package}")'
        return f'"{dependency.name}"'

    def target_lines(self, target: Target) -> List[str]:
        kind = ".testTarget(" if target.is_test else ".target("
        lines = [
            f"{_INDENT * 2}{kind}",
            f'{_INDENT * 3}name: "{target.name}",',
            f"{_INDENT * 3}dependencies: [",
        ]
        for dependency in sorted(set(target.dependencies), key=lambda d: d.sort_key):
            lines.append(f"{_INDENT * 4}{self.target_dependency_string(dependency)},")
        if not target.resources:
            lines.append(f"{_INDENT * 3}]),")
            return lines

        lines.append(f"{_INDENT * 3}],")
        lines.append(f"{_INDENT * 3}resources: [")
        for resource in sorted(target.resources, key=lambda r: (r.folder_name, r.type.value)):
            lines.append(f'{_INDENT * 4}.{resource.type.value}("{resource.folder_name}"),')
        lines.append(f"{_INDENT * 3}]),")
        return lines

    @staticmethod
    def ios_platform_string(version: IOSVersion) -> str:
        return f".iOS(.{version.value})"

    @staticmethod
    def macos_platform_string(version: MacOSVersion) -> str:
        return f".macOS(.{version.value})"


def render_package(package: SwiftPackage, swift_tools_version: str = DEFAULT_SWIFT_TOOLS_VERSION) -> str:
    """Convenience function rendering one package."""
    return PackageStringProvider(swift_tools_version).string(package)
