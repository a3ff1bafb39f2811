"""Document Model - the mutable graph of families, components and edges.

The store owns one PhoenixDocument and is its only writer. Every mutation
runs synchronously in place and re-establishes the ordering rules
before returning:

- families sorted by name
- components sorted by display name within their family
- dependencies sorted local-before-remote, then alphabetically
- remote target types and excluded families sorted

Cross references are by Name only, never by object, so removing a
component cannot leave a dangling alias behind. Updates and removals that
address an unknown name are silent no-ops.
"""

import logging
from typing import Dict, List, Optional, Union

from contracts import (
    Component,
    ComponentDependency,
    ComponentResources,
    ComponentsFamily,
    EmptyFamilyNameError,
    EmptyGivenNameError,
    EmptyURLError,
    ExternalDependencyName,
    ExternalDependencyVersion,
    Family,
    IOSVersion,
    LibraryType,
    MacOSVersion,
    Name,
    NameInUseError,
    PackageTargetType,
    PhoenixDocument,
    RemoteComponent,
    RemoteComponentExistsError,
    RemoteDependency,
    ResourcesType,
    dependency_identity,
    display_name,
    sort_dependencies,
)
from resolver import DependencyResolver, ResolutionContext

from .configuration_store import ConfigurationStore


logger = logging.getLogger(__name__)

AnyDependency = Union[ComponentDependency, RemoteDependency]


class PhoenixDocumentStore:
    """Mutation API over a PhoenixDocument that keeps it sorted and consistent."""

    def __init__(
        self,
        document: Optional[PhoenixDocument] = None,
        resolver: Optional[DependencyResolver] = None,
    ):
        """Initialize the store.

        Args:
            document: Document to edit; a new empty one when omitted
            resolver: Resolver for the initial mapping of new local edges
        """
        self.document = document or PhoenixDocument()
        self.resolver = resolver or DependencyResolver()

    # --- Queries ---

    @property
    def families(self) -> List[ComponentsFamily]:
        return self.document.families

    def all_names(self) -> List[Name]:
        return [c.name for f in self.document.families for c in f.components]

    def name_exists(self, name: Name) -> bool:
        return name in self.all_names()

    def get_component(self, name: Name) -> Optional[Component]:
        for components_family in self.document.families:
            for component in components_family.components:
                if component.name == name:
                    return component
        return None

    def get_family(self, family_name: str) -> Optional[Family]:
        components_family = self._components_family(family_name)
        return components_family.family if components_family else None

    def family_for(self, name: Name) -> Optional[Family]:
        return self.get_family(name.family)

    def title(self, name: Name) -> str:
        """Display name of a component, honouring its family's suffix rule."""
        return display_name(name, self.family_for(name))

    def contains_dependency(self, name: Name, dependency_name: Name) -> bool:
        component = self.get_component(name)
        if component is None:
            return False
        return any(d.name == dependency_name for d in component.local_dependencies)

    def dependency_candidates(self, name: Name) -> Dict[str, List[Name]]:
        """Components that may be offered as new local dependencies of `name`.

        Families excluded by the component's own family are skipped, as are
        the component itself and components it already depends on.

        Returns:
            Candidate names grouped by family name, both levels sorted
        """
        component = self.get_component(name)
        if component is None:
            return {}
        own_family = self.family_for(name)
        excluded = set(own_family.excluded_families) if own_family else set()
        existing = {d.name for d in component.local_dependencies}
        candidates: Dict[str, List[Name]] = {}
        for components_family in self.document.families:
            if components_family.family.name in excluded:
                continue
            names = [
                c.name for c in components_family.components
                if c.name != name and c.name not in existing
            ]
            if names:
                candidates[components_family.family.name] = sorted(names, key=self._title_key)
        return dict(sorted(candidates.items()))

    def remote_candidates(self, name: Name) -> List[RemoteComponent]:
        """Registered remote components the component does not use yet."""
        component = self.get_component(name)
        if component is None:
            return []
        used = {d.url for d in component.remote_dependencies}
        return [r for r in self.document.remote_components if r.url not in used]

    def snapshot(self) -> PhoenixDocument:
        """Deep copy of the document, safe to hand to a generation pass."""
        return self.document.model_copy(deep=True)

    # --- Components ---

    def add_component(self, name: Name, template: Optional[Component] = None) -> Component:
        """Add a new component, creating its family when needed.

        Args:
            name: Name of the new component
            template: Component to copy platforms, modules, dependencies and resources from

        Returns:
            The inserted component

        Raises:
            EmptyGivenNameError: name.given is empty
            EmptyFamilyNameError: name.family is empty
            NameInUseError: the {given, family} pair already exists
        """
        if not name.given:
            raise EmptyGivenNameError()
        if not name.family:
            raise EmptyFamilyNameError()
        if self.name_exists(name):
            raise NameInUseError(name.given, name.family)

        configuration = ConfigurationStore(self.document.project_configuration)
        if template is not None:
            template = template.model_copy(deep=True)
            modules = template.modules
        else:
            modules = {type_name: LibraryType.UNDEFINED for type_name in configuration.target_type_names()}

        component = Component(
            name=name,
            ios_version=template.ios_version if template else None,
            macos_version=template.macos_version if template else None,
            modules=modules,
            dependencies=template.dependencies if template else [],
            resources=template.resources if template else [],
        )

        components_family = self._components_family(name.family)
        if components_family is None:
            components_family = ComponentsFamily(family=Family(name=name.family))
            self.document.families.append(components_family)
            self._sort_families()
            logger.debug("Created family %s", name.family)

        components_family.components.append(component)
        self._sort_components(components_family)
        logger.debug("Added component %s", name)
        return component

    def remove_component(self, name: Name) -> None:
        """Remove a component; a family left without components is removed too."""
        for components_family in self.document.families:
            if any(c.name == name for c in components_family.components):
                components_family.components = [
                    c for c in components_family.components if c.name != name
                ]
                break
        else:
            return
        self.document.families = [f for f in self.document.families if f.components]

    def set_ios_version(self, name: Name, version: IOSVersion) -> None:
        component = self.get_component(name)
        if component is not None:
            component.ios_version = version

    def remove_ios_version(self, name: Name) -> None:
        component = self.get_component(name)
        if component is not None:
            component.ios_version = None

    def set_macos_version(self, name: Name, version: MacOSVersion) -> None:
        component = self.get_component(name)
        if component is not None:
            component.macos_version = version

    def remove_macos_version(self, name: Name) -> None:
        component = self.get_component(name)
        if component is not None:
            component.macos_version = None

    def add_module_type(self, name: Name, module_type: str) -> None:
        component = self.get_component(name)
        if component is not None:
            component.modules[module_type] = LibraryType.UNDEFINED

    def remove_module_type(self, name: Name, module_type: str) -> None:
        """Remove a module and every edge mapping entry that refers to it.

        Entries keyed by the module (or its test target) are dropped from the
        component's own edges, and entries linking to it are dropped from
        edges pointing at the component.
        """
        component = self.get_component(name)
        if component is None or module_type not in component.modules:
            return
        del component.modules[module_type]

        for dependency in component.dependencies:
            if isinstance(dependency, ComponentDependency):
                dependency.target_types = {
                    key: value for key, value in dependency.target_types.items()
                    if key.name != module_type
                }
            else:
                dependency.target_types = [t for t in dependency.target_types if t.name != module_type]
        for resource in component.resources:
            resource.targets = [t for t in resource.targets if t.name != module_type]

        for components_family in self.document.families:
            for other in components_family.components:
                for dependency in other.local_dependencies:
                    if dependency.name == name:
                        dependency.target_types = {
                            key: value for key, value in dependency.target_types.items()
                            if value != module_type
                        }

    def set_library_type(self, name: Name, module_type: str, library_type: LibraryType) -> None:
        component = self.get_component(name)
        if component is not None:
            component.modules[module_type] = library_type

    def update_component_default_dependency(
        self,
        name: Name,
        target_type: PackageTargetType,
        value: Optional[str],
    ) -> None:
        component = self.get_component(name)
        if component is None:
            return
        if value is None:
            component.default_dependencies.pop(target_type, None)
        else:
            component.default_dependencies[target_type] = value

    # --- Families ---

    def update_family_folder(self, family_name: str, folder: Optional[str]) -> None:
        family = self.get_family(family_name)
        if family is not None:
            family.folder = folder or None

    def update_family_ignore_suffix(self, family_name: str, ignore_suffix: bool) -> None:
        components_family = self._components_family(family_name)
        if components_family is None:
            return
        components_family.family.ignore_suffix = ignore_suffix
        self._sort_components(components_family)

    def update_family_exclusion_rule(self, family_name: str, other_family: str, enabled: bool) -> None:
        """Allow (`enabled`) or exclude `other_family` as a dependency source of `family_name`.

        Edges that already cross the rule are kept.
        """
        family = self.get_family(family_name)
        if family is None:
            return
        if enabled:
            family.excluded_families = [f for f in family.excluded_families if f != other_family]
        elif other_family not in family.excluded_families:
            family.excluded_families = sorted(family.excluded_families + [other_family])

    def update_family_default_dependency(
        self,
        family_name: str,
        target_type: PackageTargetType,
        value: Optional[str],
    ) -> None:
        family = self.get_family(family_name)
        if family is None:
            return
        if value is None:
            family.default_dependencies.pop(target_type, None)
        else:
            family.default_dependencies[target_type] = value

    # --- Dependencies ---

    def add_local_dependency(self, name: Name, dependency_name: Name) -> None:
        """Add a local edge from `name` to `dependency_name` with resolved defaults.

        Self-references and repeated edges are ignored.
        """
        component = self.get_component(name)
        dependency = self.get_component(dependency_name)
        if component is None or dependency is None or name == dependency_name:
            return
        if self.contains_dependency(name, dependency_name):
            return

        context = ResolutionContext(
            dependent=component,
            dependency=dependency,
            dependency_family=self.family_for(dependency_name),
            project_defaults=self.document.project_configuration.default_dependencies,
        )
        target_types = self.resolver.resolve(context)
        component.dependencies = sort_dependencies(
            component.dependencies
            + [ComponentDependency(name=dependency_name, target_types=target_types)]
        )
        logger.debug("Added dependency %s -> %s %s", name, dependency_name, target_types)

    def remove_local_dependency(self, name: Name, dependency: ComponentDependency) -> None:
        self._remove_dependency(name, dependency)

    def add_remote_dependency(self, name: Name, dependency: RemoteDependency) -> None:
        component = self.get_component(name)
        if component is None:
            return
        identity = dependency_identity(dependency)
        if any(dependency_identity(d) == identity for d in component.dependencies):
            return
        dependency = dependency.model_copy(deep=True)
        dependency.target_types = sorted(set(dependency.target_types))
        component.dependencies = sort_dependencies(component.dependencies + [dependency])

    def remove_remote_dependency(self, name: Name, dependency: RemoteDependency) -> None:
        self._remove_dependency(name, dependency)

    def update_target_mapping(
        self,
        name: Name,
        dependency: ComponentDependency,
        target_type: PackageTargetType,
        value: Optional[str],
    ) -> None:
        """Set, or clear with `value=None`, one entry of a local edge mapping."""
        edge = self._find_dependency(name, dependency)
        if not isinstance(edge, ComponentDependency):
            return
        if value is None:
            edge.target_types.pop(target_type, None)
        else:
            edge.target_types[target_type] = value

    def update_remote_target_types(
        self,
        name: Name,
        dependency: RemoteDependency,
        target_type: PackageTargetType,
        enabled: bool,
    ) -> None:
        edge = self._find_dependency(name, dependency)
        if not isinstance(edge, RemoteDependency):
            return
        if enabled and target_type not in edge.target_types:
            edge.target_types = sorted(edge.target_types + [target_type])
        elif not enabled:
            edge.target_types = [t for t in edge.target_types if t != target_type]

    def update_remote_version(
        self,
        name: Name,
        dependency: RemoteDependency,
        version: ExternalDependencyVersion,
    ) -> None:
        edge = self._find_dependency(name, dependency)
        if isinstance(edge, RemoteDependency):
            edge.version = version.model_copy()

    def update_remote_version_value(self, name: Name, dependency: RemoteDependency, value: str) -> None:
        """Change the version string while keeping its kind (from/exact/branch)."""
        edge = self._find_dependency(name, dependency)
        if isinstance(edge, RemoteDependency):
            edge.version = ExternalDependencyVersion(kind=edge.version.kind, value=value)

    # --- Resources ---

    def add_resource(self, name: Name, folder_name: str) -> Optional[ComponentResources]:
        component = self.get_component(name)
        if component is None:
            return None
        resource = ComponentResources(folder_name=folder_name, type=ResourcesType.PROCESS)
        component.resources.append(resource)
        return resource

    def update_resources(self, name: Name, resources: List[ComponentResources]) -> None:
        component = self.get_component(name)
        if component is None:
            return
        updated = [r.model_copy(deep=True) for r in resources]
        for resource in updated:
            resource.targets = sorted(set(resource.targets))
        component.resources = updated

    def remove_resource(self, name: Name, resource_id: str) -> None:
        component = self.get_component(name)
        if component is not None:
            component.resources = [r for r in component.resources if r.id != resource_id]

    # --- Remote components ---

    def add_remote_component(
        self,
        url: str,
        version: ExternalDependencyVersion,
        names: Optional[List[ExternalDependencyName]] = None,
    ) -> RemoteComponent:
        """Register a hosted package.

        Raises:
            EmptyURLError: url is empty
            RemoteComponentExistsError: url is already registered
        """
        if not url:
            raise EmptyURLError()
        if any(r.url == url for r in self.document.remote_components):
            raise RemoteComponentExistsError(url)
        remote = RemoteComponent(url=url, version=version, names=list(names or []))
        self.document.remote_components.append(remote)
        self.document.remote_components.sort(key=lambda r: r.url)
        return remote

    def remove_remote_component(self, url: str) -> None:
        """Unregister a hosted package and drop every remote edge pointing at it."""
        self.document.remote_components = [
            r for r in self.document.remote_components if r.url != url
        ]
        for components_family in self.document.families:
            for component in components_family.components:
                component.dependencies = [
                    d for d in component.dependencies
                    if not (isinstance(d, RemoteDependency) and d.url == url)
                ]

    # --- Private ---

    def _components_family(self, family_name: str) -> Optional[ComponentsFamily]:
        for components_family in self.document.families:
            if components_family.family.name == family_name:
                return components_family
        return None

    def _title_key(self, name: Name) -> tuple:
        return (self.title(name),) + name.sort_key

    def _sort_families(self) -> None:
        self.document.families.sort(key=lambda f: f.family.name)

    def _sort_components(self, components_family: ComponentsFamily) -> None:
        family = components_family.family
        components_family.components.sort(
            key=lambda c: (display_name(c.name, family),) + c.name.sort_key
        )

    def _find_dependency(self, name: Name, dependency: AnyDependency) -> Optional[AnyDependency]:
        component = self.get_component(name)
        if component is None:
            return None
        identity = dependency_identity(dependency)
        for edge in component.dependencies:
            if dependency_identity(edge) == identity:
                return edge
        return None

    def _remove_dependency(self, name: Name, dependency: AnyDependency) -> None:
        component = self.get_component(name)
        if component is None:
            return
        identity = dependency_identity(dependency)
        component.dependencies = sort_dependencies(
            [d for d in component.dependencies if dependency_identity(d) != identity]
        )
