"""Graph Extractor - turns components into package descriptors.

Each component becomes one package at `<family folder>/<display name>`.
Every declared target type becomes a library product and a target named
`<package><type>`; target types the project marks as tested also get a
`<package><type>Tests` test target. Edges become target dependencies
following the mapping stored on them:

- local: target of type T depends on the target of the mapped type on
  the referenced component, and the package depends on it by relative path
- remote: targets whose type is enabled depend on the remote product, and
  the package depends on the remote url once
"""

import logging
import posixpath
from typing import Dict, List, Optional, Tuple

from contracts import (
    Component,
    ComponentDependency,
    Family,
    LibraryProduct,
    LibraryType,
    ModulePackageDependency,
    Name,
    PackageTargetType,
    PackageWithPath,
    PhoenixDocument,
    RemoteDependency,
    RemotePackageDependency,
    SwiftPackage,
    Target,
    TargetDependency,
    TargetResource,
    display_name,
)
from document import ConfigurationStore

from .family_folder_name import FamilyFolderNameProvider


logger = logging.getLogger(__name__)

ComponentIndex = Dict[Name, Tuple[Component, Family]]


def target_name(package_name: str, type_name: str, is_tests: bool = False) -> str:
    name = package_name + type_name
    return name + "Tests" if is_tests else name


class ComponentExtractor:
    """Builds a SwiftPackage descriptor and relative path for every component."""

    def __init__(self, folder_name_provider: Optional[FamilyFolderNameProvider] = None):
        self.folder_name_provider = folder_name_provider or FamilyFolderNameProvider()

    def package_path(self, name: Name, family: Family) -> str:
        """Directory of the component's package, relative to the workspace root."""
        folder = self.folder_name_provider.folder(family).strip("/")
        return posixpath.join(folder, display_name(name, family))

    def packages(self, document: PhoenixDocument) -> List[PackageWithPath]:
        """Extract every component of the document, in document order.

        Args:
            document: Snapshot of the document; it is only read

        Returns:
            One PackageWithPath per component
        """
        configuration = ConfigurationStore(document.project_configuration)
        index = self.index(document)
        return [
            self.package(component, components_family.family, index, configuration)
            for components_family in document.families
            for component in components_family.components
        ]

    @staticmethod
    def index(document: PhoenixDocument) -> ComponentIndex:
        return {
            component.name: (component, components_family.family)
            for components_family in document.families
            for component in components_family.components
        }

    def package(
        self,
        component: Component,
        family: Family,
        index: ComponentIndex,
        configuration: ConfigurationStore,
    ) -> PackageWithPath:
        """Extract one component.

        Target types missing from the configuration are still emitted, only
        without a test target.
        """
        package_name = display_name(component.name, family)
        path = self.package_path(component.name, family)

        products: List[LibraryProduct] = []
        targets: Dict[PackageTargetType, Target] = {}
        for type_name, linkage in component.modules.items():
            name = target_name(package_name, type_name)
            products.append(LibraryProduct(
                name=name,
                type=None if linkage == LibraryType.UNDEFINED else linkage,
                targets=[name],
            ))
            targets[PackageTargetType(name=type_name)] = Target(name=name)
            if configuration.has_tests(type_name):
                targets[PackageTargetType(name=type_name, is_tests=True)] = Target(
                    name=target_name(package_name, type_name, is_tests=True),
                    is_test=True,
                    dependencies=[TargetDependency(name=name)],
                )

        package_dependencies: Dict[tuple, object] = {}
        for dependency in component.dependencies:
            match dependency:
                case ComponentDependency():
                    self._link_local(dependency, path, targets, index, package_dependencies)
                case RemoteDependency():
                    self._link_remote(dependency, targets, package_dependencies)

        for resource in component.resources:
            for target_type in resource.targets:
                target = targets.get(target_type)
                if target is not None:
                    target.resources.append(
                        TargetResource(folder_name=resource.folder_name, type=resource.type)
                    )

        package = SwiftPackage(
            name=package_name,
            ios_version=component.ios_version,
            macos_version=component.macos_version,
            products=products,
            dependencies=list(package_dependencies.values()),
            targets=list(targets.values()),
        )
        return PackageWithPath(package=package, path=path)

    def _link_local(
        self,
        dependency: ComponentDependency,
        path: str,
        targets: Dict[PackageTargetType, Target],
        index: ComponentIndex,
        package_dependencies: Dict[tuple, object],
    ) -> None:
        entry = index.get(dependency.name)
        if entry is None:
            logger.warning("Skipping dependency on missing component %s", dependency.name)
            return
        dependency_component, dependency_family = entry
        dependency_package = display_name(dependency.name, dependency_family)

        linked = False
        for target_type, value in dependency.target_types.items():
            target = targets.get(target_type)
            if target is None or value not in dependency_component.modules:
                continue
            target.dependencies.append(TargetDependency(name=target_name(dependency_package, value)))
            linked = True

        if linked:
            dependency_path = self.package_path(dependency.name, dependency_family)
            package_dependencies[("module", dependency_path)] = ModulePackageDependency(
                path=posixpath.relpath(dependency_path, path),
                name=dependency_package,
            )

    @staticmethod
    def _link_remote(
        dependency: RemoteDependency,
        targets: Dict[PackageTargetType, Target],
        package_dependencies: Dict[tuple, object],
    ) -> None:
        linked = False
        for target_type in dependency.target_types:
            target = targets.get(target_type)
            if target is None:
                continue
            target.dependencies.append(
                TargetDependency(name=dependency.name.name, package=dependency.name.package)
            )
            linked = True

        key = ("remote", dependency.url)
        if linked and key not in package_dependencies:
            package_dependencies[key] = RemotePackageDependency(
                url=dependency.url,
                version=dependency.version,
            )
