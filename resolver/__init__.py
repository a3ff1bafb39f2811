"""Resolver module for default dependency target mappings."""

from .default_dependencies import (
    ResolutionContext,
    DefaultsStrategy,
    DependencyResolver,
    DEFAULT_STRATEGIES,
    component_defaults,
    family_defaults,
    project_defaults,
    resolve_target_types,
)

__all__ = [
    "ResolutionContext",
    "DefaultsStrategy",
    "DependencyResolver",
    "DEFAULT_STRATEGIES",
    "component_defaults",
    "family_defaults",
    "project_defaults",
    "resolve_target_types",
]
