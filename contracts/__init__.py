"""Pydantic contracts for the Phoenix manifest compiler.

Every piece of data moving between the document model, the extractor and
the serializer is typed through these contracts.
"""

from .target_contracts import (
    Name,
    PackageTargetType,
    LibraryType,
    IOSVersion,
    MacOSVersion,
    TargetTypeMapping,
)

from .dependency_contracts import (
    VersionKind,
    ExternalDependencyVersion,
    ExternalDependencyName,
    ComponentDependency,
    RemoteDependency,
    ComponentDependencyType,
    dependency_sort_key,
    dependency_identity,
    sort_dependencies,
)

from .component_contracts import (
    ResourcesType,
    ComponentResources,
    Family,
    Component,
    display_name,
)

from .document_contracts import (
    PackageConfiguration,
    ProjectConfiguration,
    RemoteComponent,
    ComponentsFamily,
    PhoenixDocument,
)

from .package_contracts import (
    LibraryProduct,
    ModulePackageDependency,
    RemotePackageDependency,
    PackageDependency,
    TargetDependency,
    TargetResource,
    Target,
    SwiftPackage,
    PackageWithPath,
)

from .errors import (
    PhoenixError,
    DocumentError,
    DuplicateNameError,
    EmptyGivenNameError,
    EmptyFamilyNameError,
    NameInUseError,
    EmptyURLError,
    RemoteComponentExistsError,
    DocumentLoadError,
    DependencyCycleError,
    ScriptExecutionError,
    GenerationError,
)

__all__ = [
    # Targets
    "Name",
    "PackageTargetType",
    "LibraryType",
    "IOSVersion",
    "MacOSVersion",
    "TargetTypeMapping",
    # Dependencies
    "VersionKind",
    "ExternalDependencyVersion",
    "ExternalDependencyName",
    "ComponentDependency",
    "RemoteDependency",
    "ComponentDependencyType",
    "dependency_sort_key",
    "dependency_identity",
    "sort_dependencies",
    # Components
    "ResourcesType",
    "ComponentResources",
    "Family",
    "Component",
    "display_name",
    # Document
    "PackageConfiguration",
    "ProjectConfiguration",
    "RemoteComponent",
    "ComponentsFamily",
    "PhoenixDocument",
    # Package descriptors
    "LibraryProduct",
    "ModulePackageDependency",
    "RemotePackageDependency",
    "PackageDependency",
    "TargetDependency",
    "TargetResource",
    "Target",
    "SwiftPackage",
    "PackageWithPath",
    # Errors
    "PhoenixError",
    "DocumentError",
    "DuplicateNameError",
    "EmptyGivenNameError",
    "EmptyFamilyNameError",
    "NameInUseError",
    "EmptyURLError",
    "RemoteComponentExistsError",
    "DocumentLoadError",
    "DependencyCycleError",
    "ScriptExecutionError",
    "GenerationError",
]
