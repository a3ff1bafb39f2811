"""Read-only view of the project configuration for one generation pass."""

from typing import Dict, List, Optional

from contracts import PackageConfiguration, PackageTargetType, ProjectConfiguration


class ConfigurationStore:
    """Immutable snapshot of a ProjectConfiguration.

    Malformed configuration (e.g. duplicate target type names) is the
    caller's responsibility and is not validated here.
    """

    def __init__(self, configuration: ProjectConfiguration):
        self._configuration = configuration.model_copy(deep=True)

    def target_types(self) -> List[PackageConfiguration]:
        """Declared target types, in declaration order."""
        return [item.model_copy() for item in self._configuration.package_configurations]

    def target_type_names(self) -> List[str]:
        return [item.name for item in self._configuration.package_configurations]

    def has_tests(self, name: str) -> bool:
        """Whether the target type named `name` has a paired test target."""
        return any(
            item.name == name and item.has_tests
            for item in self._configuration.package_configurations
        )

    def default_dependency(self, target_type: PackageTargetType) -> Optional[str]:
        return self._configuration.default_dependencies.get(target_type)

    def default_dependencies(self) -> Dict[PackageTargetType, str]:
        return dict(self._configuration.default_dependencies)

    @property
    def custom_script_path(self) -> Optional[str]:
        return self._configuration.custom_script_path
