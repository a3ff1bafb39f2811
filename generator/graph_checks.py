"""Consistency checks run on a generation pass before anything is written."""

import logging
import posixpath
from typing import Dict, List, Optional, Tuple

from contracts import (
    DependencyCycleError,
    ModulePackageDependency,
    Name,
    PackageWithPath,
    PhoenixDocument,
)


logger = logging.getLogger(__name__)


def package_graph(packages: List[PackageWithPath]) -> Dict[str, List[str]]:
    """Adjacency of package paths through their local path dependencies."""
    graph: Dict[str, List[str]] = {}
    for item in packages:
        edges = []
        for dependency in item.package.dependencies:
            if isinstance(dependency, ModulePackageDependency):
                edges.append(posixpath.normpath(posixpath.join(item.path, dependency.path)))
        graph[item.path] = sorted(edges)
    return graph


def find_cycle(packages: List[PackageWithPath]) -> Optional[List[str]]:
    """Return the first package cycle found, as package names, or None.

    The search visits packages in path order, so the reported cycle is
    deterministic for a given set of packages.
    """
    graph = package_graph(packages)
    names = {item.path: item.package.name for item in packages}
    visiting, done = set(), set()
    stack: List[str] = []

    def visit(node: str) -> Optional[List[str]]:
        visiting.add(node)
        stack.append(node)
        for neighbour in graph.get(node, []):
            if neighbour in visiting:
                start = stack.index(neighbour)
                return stack[start:] + [neighbour]
            if neighbour not in done:
                cycle = visit(neighbour)
                if cycle:
                    return cycle
        stack.pop()
        visiting.discard(node)
        done.add(node)
        return None

    for node in sorted(graph):
        if node not in done:
            cycle = visit(node)
            if cycle:
                return [names.get(path, path) for path in cycle]
    return None


def exclusion_violations(document: PhoenixDocument) -> List[Tuple[Name, Name]]:
    """Local edges pointing into a family the dependent's family excludes.

    Exclusion rules only filter dependency candidates while editing; edges
    created before a rule changed are kept and reported here.
    """
    violations = []
    for components_family in document.families:
        excluded = set(components_family.family.excluded_families)
        for component in components_family.components:
            for dependency in component.local_dependencies:
                if dependency.name.family in excluded:
                    violations.append((component.name, dependency.name))
    return violations


def duplicate_paths(packages: List[PackageWithPath]) -> Dict[str, List[str]]:
    """Package paths claimed by more than one package, with the package names."""
    claims: Dict[str, List[str]] = {}
    for item in packages:
        claims.setdefault(item.path, []).append(item.package.name)
    return {path: names for path, names in sorted(claims.items()) if len(names) > 1}


def check_graph(
    document: PhoenixDocument,
    packages: List[PackageWithPath],
    fail_on_cycles: bool = True,
) -> None:
    """Validate a generation pass.

    Args:
        document: Snapshot the packages were extracted from
        packages: Extracted packages
        fail_on_cycles: Raise on a package cycle instead of logging it

    Raises:
        DependencyCycleError: packages depend on each other in a cycle
    """
    for path, names in duplicate_paths(packages).items():
        logger.warning(
            "%d packages share %s and overwrite each other: %s", len(names), path, ", ".join(names)
        )

    for dependent, dependency in exclusion_violations(document):
        logger.warning(
            "%s depends on %s across a family exclusion rule", dependent, dependency
        )

    cycle = find_cycle(packages)
    if cycle is None:
        return
    if fail_on_cycles:
        raise DependencyCycleError(cycle)
    logger.warning("Dependency cycle detected: %s", " -> ".join(cycle))
