"""Manifest descriptors produced by the extractor and consumed by the serializer.

Order inside these descriptors carries no meaning; the serializer sorts
every collection right before emission.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .component_contracts import ResourcesType
from .dependency_contracts import ExternalDependencyVersion
from .target_contracts import IOSVersion, LibraryType, MacOSVersion


class LibraryProduct(BaseModel):
    """Library product exposing one target."""

    name: str
    type: Optional[LibraryType] = Field(None, description="None or UNDEFINED emits no linkage")
    targets: List[str] = Field(default_factory=list)


class ModulePackageDependency(BaseModel):
    """Local package referenced by relative path."""

    kind: Literal["module"] = "module"
    path: str
    name: str


class RemotePackageDependency(BaseModel):
    """Hosted package referenced by url and version."""

    kind: Literal["remote"] = "remote"
    url: str
    version: ExternalDependencyVersion


PackageDependency = Annotated[
    Union[ModulePackageDependency, RemotePackageDependency],
    Field(discriminator="kind"),
]


class TargetDependency(BaseModel):
    """Dependency of one target: a target/product name, optionally package-qualified."""

    model_config = {"frozen": True}

    name: str
    package: Optional[str] = None

    @property
    def sort_key(self) -> tuple:
        return (self.name, self.package or "")


class TargetResource(BaseModel):
    folder_name: str
    type: ResourcesType = ResourcesType.PROCESS


class Target(BaseModel):
    """Build target, possibly a test target."""

    name: str
    is_test: bool = False
    dependencies: List[TargetDependency] = Field(default_factory=list)
    resources: List[TargetResource] = Field(default_factory=list)


class SwiftPackage(BaseModel):
    """Descriptor of one generated package manifest."""

    name: str
    ios_version: Optional[IOSVersion] = None
    macos_version: Optional[MacOSVersion] = None
    products: List[LibraryProduct] = Field(default_factory=list)
    dependencies: List[PackageDependency] = Field(default_factory=list)
    targets: List[Target] = Field(default_factory=list)


class PackageWithPath(BaseModel):
    """A package and its directory relative to the workspace root."""

    package: SwiftPackage
    path: str = Field(..., description="POSIX path relative to the workspace root")
