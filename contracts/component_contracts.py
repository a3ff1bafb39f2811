"""Component and family contracts."""

from enum import Enum
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from .dependency_contracts import (
    ComponentDependency,
    ComponentDependencyType,
    RemoteDependency,
    sort_dependencies,
)
from .target_contracts import (
    IOSVersion,
    LibraryType,
    MacOSVersion,
    Name,
    PackageTargetType,
    TargetTypeMapping,
)


class ResourcesType(str, Enum):
    """How a resource folder is bundled."""
    COPY = "copy"
    PROCESS = "process"


class ComponentResources(BaseModel):
    """A resource folder bundled into some of a component's targets."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    folder_name: str = Field(..., description="Folder relative to the target sources")
    type: ResourcesType = Field(default=ResourcesType.PROCESS)
    targets: List[PackageTargetType] = Field(default_factory=list)


class Family(BaseModel):
    """Naming and grouping scope shared by components."""

    name: str = Field(..., description="Unique family name, also the name suffix")
    ignore_suffix: bool = Field(
        default=False,
        description="Display components by given name only",
    )
    folder: Optional[str] = Field(None, description="Output folder override")
    excluded_families: List[str] = Field(
        default_factory=list,
        description="Families whose components are not offered as dependencies",
    )
    default_dependencies: TargetTypeMapping = Field(default_factory=dict)


class Component(BaseModel):
    """A named unit of functionality, generated as one package."""

    name: Name
    ios_version: Optional[IOSVersion] = None
    macos_version: Optional[MacOSVersion] = None
    modules: Dict[str, LibraryType] = Field(
        default_factory=dict,
        description="Declared target types and their library linkage",
    )
    dependencies: List[ComponentDependencyType] = Field(default_factory=list)
    resources: List[ComponentResources] = Field(default_factory=list)
    default_dependencies: TargetTypeMapping = Field(
        default_factory=dict,
        description="Mapping offered to components that add this one as a dependency",
    )

    @model_validator(mode="after")
    def _sorted_dependencies(self) -> "Component":
        self.dependencies = sort_dependencies(self.dependencies)
        return self

    @property
    def local_dependencies(self) -> List[ComponentDependency]:
        return [d for d in self.dependencies if isinstance(d, ComponentDependency)]

    @property
    def remote_dependencies(self) -> List[RemoteDependency]:
        return [d for d in self.dependencies if isinstance(d, RemoteDependency)]


def display_name(name: Name, family: Optional[Family]) -> str:
    """Full display name: the given name alone when the family ignores its suffix."""
    if family is not None and family.ignore_suffix:
        return name.given
    return name.full
