"""Resolution of the initial target mapping of a new local dependency edge.

Defaults cascade from the dependency component, to its family, to the
project. Each scope is a strategy; the first one returning a non-empty
mapping wins, and the result is then narrowed to target types that both
ends of the edge actually declare.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Sequence

from contracts import Component, Family, PackageTargetType


logger = logging.getLogger(__name__)


@dataclass
class ResolutionContext:
    """Everything the strategies may read to resolve one edge."""
    dependent: Component
    dependency: Component
    dependency_family: Optional[Family] = None
    project_defaults: Mapping[PackageTargetType, str] = field(default_factory=dict)


DefaultsStrategy = Callable[[ResolutionContext], Mapping[PackageTargetType, str]]


def component_defaults(context: ResolutionContext) -> Mapping[PackageTargetType, str]:
    """Defaults declared on the dependency component itself."""
    return context.dependency.default_dependencies


def family_defaults(context: ResolutionContext) -> Mapping[PackageTargetType, str]:
    """Defaults declared on the dependency's family."""
    if context.dependency_family is None:
        return {}
    return context.dependency_family.default_dependencies


def project_defaults(context: ResolutionContext) -> Mapping[PackageTargetType, str]:
    """Project-wide defaults."""
    return context.project_defaults


DEFAULT_STRATEGIES: Sequence[DefaultsStrategy] = (
    component_defaults,
    family_defaults,
    project_defaults,
)


class DependencyResolver:
    """Computes the per-target-type mapping stored on a new local edge."""

    def __init__(self, strategies: Optional[Sequence[DefaultsStrategy]] = None):
        """Initialize the resolver.

        Args:
            strategies: Ordered default lookups; the first non-empty result wins
        """
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    def default_mapping(self, context: ResolutionContext) -> Dict[PackageTargetType, str]:
        """Return the first non-empty mapping of the strategy chain."""
        for strategy in self.strategies:
            mapping = strategy(context)
            if mapping:
                logger.debug(
                    "Defaults for %s -> %s taken from %s",
                    context.dependent.name, context.dependency.name, strategy.__name__,
                )
                return dict(mapping)
        return {}

    def resolve(self, context: ResolutionContext) -> Dict[PackageTargetType, str]:
        """Resolve the edge mapping, keeping only types present on both ends.

        Args:
            context: Dependent, dependency and the scopes holding defaults

        Returns:
            Mapping of dependent target type to dependency target type name
        """
        mapping = self.default_mapping(context)
        return {
            target_type: value
            for target_type, value in mapping.items()
            if target_type.name in context.dependent.modules
            and value in context.dependency.modules
        }


def resolve_target_types(
    dependent: Component,
    dependency: Component,
    dependency_family: Optional[Family] = None,
    project_defaults: Optional[Mapping[PackageTargetType, str]] = None,
) -> Dict[PackageTargetType, str]:
    """Convenience function resolving one edge with the default strategy chain.

    Args:
        dependent: Component gaining the dependency
        dependency: Component being depended on
        dependency_family: Family of the dependency, if it exists
        project_defaults: Project-level default mapping

    Returns:
        Initial target mapping for the new edge
    """
    context = ResolutionContext(
        dependent=dependent,
        dependency=dependency,
        dependency_family=dependency_family,
        project_defaults=project_defaults or {},
    )
    return DependencyResolver().resolve(context)
