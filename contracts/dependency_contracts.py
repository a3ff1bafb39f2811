"""Dependency contracts: the closed local/remote union stored on components."""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .target_contracts import Name, PackageTargetType, TargetTypeMapping


class VersionKind(str, Enum):
    """How a remote package version is pinned."""
    FROM = "from"
    EXACT = "exact"
    BRANCH = "branch"


class ExternalDependencyVersion(BaseModel):
    """Version requirement of a remote package."""

    kind: VersionKind = Field(default=VersionKind.FROM, description="Pinning strategy")
    value: str = Field(..., description="Version string or branch name")

    @classmethod
    def from_version(cls, version: str) -> "ExternalDependencyVersion":
        return cls(kind=VersionKind.FROM, value=version)

    @classmethod
    def exact(cls, version: str) -> "ExternalDependencyVersion":
        return cls(kind=VersionKind.EXACT, value=version)

    @classmethod
    def branch(cls, name: str) -> "ExternalDependencyVersion":
        return cls(kind=VersionKind.BRANCH, value=name)


class ExternalDependencyName(BaseModel):
    """Product of a remote package: a simple name or a product/package pair."""

    model_config = {"frozen": True}

    name: str = Field(..., description="Product name")
    package: Optional[str] = Field(None, description="Package name when it differs from the product")

    @property
    def sort_key(self) -> tuple:
        return (self.name, self.package or "")


class ComponentDependency(BaseModel):
    """Local edge: 'my <key> target depends on the <value> target of `name`'."""

    kind: Literal["local"] = "local"
    name: Name = Field(..., description="Referenced component")
    target_types: TargetTypeMapping = Field(
        default_factory=dict,
        description="Target type on the dependent -> target type name on the dependency",
    )


class RemoteDependency(BaseModel):
    """Remote edge on a hosted package product."""

    kind: Literal["remote"] = "remote"
    url: str = Field(..., description="Package repository url")
    name: ExternalDependencyName
    version: ExternalDependencyVersion
    target_types: List[PackageTargetType] = Field(
        default_factory=list,
        description="Dependent target types that link the product (kept sorted)",
    )


ComponentDependencyType = Annotated[
    Union[ComponentDependency, RemoteDependency],
    Field(discriminator="kind"),
]


def dependency_sort_key(dependency: Union[ComponentDependency, RemoteDependency]) -> tuple:
    """Total order on dependencies: local before remote, then alphabetical."""
    match dependency:
        case ComponentDependency(name=name):
            return (0,) + name.sort_key
        case RemoteDependency(url=url, name=product):
            return (1, url) + product.sort_key
    raise TypeError(f"Unknown dependency type: {type(dependency).__name__}")


def dependency_identity(dependency: Union[ComponentDependency, RemoteDependency]) -> tuple:
    """Key that addresses one edge regardless of its editable fields."""
    match dependency:
        case ComponentDependency(name=name):
            return ("local", name)
        case RemoteDependency(url=url, name=product):
            return ("remote", url, product)
    raise TypeError(f"Unknown dependency type: {type(dependency).__name__}")


def sort_dependencies(dependencies: list) -> list:
    return sorted(dependencies, key=dependency_sort_key)
