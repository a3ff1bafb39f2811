"""Document root and project configuration contracts."""

from typing import List, Optional

from pydantic import BaseModel, Field

from .component_contracts import Component, Family
from .dependency_contracts import ExternalDependencyName, ExternalDependencyVersion
from .target_contracts import TargetTypeMapping


class PackageConfiguration(BaseModel):
    """A target type declared by the project."""

    name: str = Field(..., description="Target type name, e.g. 'Implementation'")
    has_tests: bool = Field(default=False, description="Target type has a paired test target")


class ProjectConfiguration(BaseModel):
    """Project-wide settings stored in the document."""

    package_configurations: List[PackageConfiguration] = Field(default_factory=list)
    default_dependencies: TargetTypeMapping = Field(default_factory=dict)
    custom_script_path: Optional[str] = Field(
        None,
        description="Script run after generation, relative to the workspace root",
    )


class RemoteComponent(BaseModel):
    """A hosted package registered in the document."""

    url: str
    version: ExternalDependencyVersion
    names: List[ExternalDependencyName] = Field(default_factory=list)


class ComponentsFamily(BaseModel):
    """A family with its components, sorted by display name."""

    family: Family
    components: List[Component] = Field(default_factory=list)


class PhoenixDocument(BaseModel):
    """Root of the editable model; families are sorted by name."""

    families: List[ComponentsFamily] = Field(default_factory=list)
    remote_components: List[RemoteComponent] = Field(default_factory=list)
    project_configuration: ProjectConfiguration = Field(default_factory=ProjectConfiguration)
