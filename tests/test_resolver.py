"""Tests for the default dependency resolver."""

from contracts import Component, Family, LibraryType, Name, PackageTargetType
from resolver import (
    DependencyResolver,
    ResolutionContext,
    component_defaults,
    project_defaults,
    resolve_target_types,
)


CONTRACT = PackageTargetType(name="Contract")
IMPLEMENTATION = PackageTargetType(name="Implementation")
IMPLEMENTATION_TESTS = PackageTargetType(name="Implementation", is_tests=True)


def component(given: str, family: str, *types: str, **kwargs) -> Component:
    return Component(
        name=Name(given=given, family=family),
        modules={t: LibraryType.UNDEFINED for t in types},
        **kwargs,
    )


class TestCascade:
    """Test the component -> family -> project cascade."""

    def test_component_defaults_win(self):
        dependency = component(
            "Http", "Service", "Contract", "Implementation", "Mock",
            default_dependencies={IMPLEMENTATION: "Contract"},
        )
        result = resolve_target_types(
            component("Home", "Feature", "Contract", "Implementation"),
            dependency,
            Family(name="Service", default_dependencies={IMPLEMENTATION: "Implementation"}),
            {IMPLEMENTATION: "Mock"},
        )
        assert result == {IMPLEMENTATION: "Contract"}

    def test_family_defaults_when_component_has_none(self):
        result = resolve_target_types(
            component("Home", "Feature", "Contract", "Implementation"),
            component("Http", "Service", "Contract", "Implementation", "Mock"),
            Family(name="Service", default_dependencies={IMPLEMENTATION: "Contract"}),
            {IMPLEMENTATION: "Implementation"},
        )
        assert result == {IMPLEMENTATION: "Contract"}

    def test_project_defaults_last(self):
        result = resolve_target_types(
            component("Home", "Feature", "Contract", "Implementation"),
            component("Http", "Service", "Contract", "Implementation"),
            Family(name="Service"),
            {CONTRACT: "Contract", IMPLEMENTATION: "Implementation"},
        )
        assert result == {CONTRACT: "Contract", IMPLEMENTATION: "Implementation"}

    def test_no_defaults_anywhere(self):
        result = resolve_target_types(
            component("Home", "Feature", "Contract"),
            component("Http", "Service", "Contract"),
        )
        assert result == {}


class TestFiltering:
    """Test narrowing to target types both ends declare."""

    def test_dependent_must_declare_key(self):
        result = resolve_target_types(
            component("Home", "Feature", "Implementation"),
            component("Http", "Service", "Contract", "Implementation"),
            None,
            {CONTRACT: "Contract", IMPLEMENTATION: "Contract"},
        )
        assert result == {IMPLEMENTATION: "Contract"}

    def test_dependency_must_declare_value(self):
        result = resolve_target_types(
            component("Home", "Feature", "Contract", "Implementation"),
            component("Http", "Service", "Contract"),
            None,
            {CONTRACT: "Contract", IMPLEMENTATION: "Implementation", IMPLEMENTATION_TESTS: "Mock"},
        )
        assert result == {CONTRACT: "Contract"}

    def test_test_keys_use_the_base_type_name(self):
        result = resolve_target_types(
            component("Home", "Feature", "Implementation"),
            component("Http", "Service", "Contract", "Mock"),
            None,
            {IMPLEMENTATION: "Contract", IMPLEMENTATION_TESTS: "Mock"},
        )
        assert result == {IMPLEMENTATION: "Contract", IMPLEMENTATION_TESTS: "Mock"}


class TestDependencyResolver:
    """Test the strategy chain itself."""

    def test_custom_strategy_order(self):
        context = ResolutionContext(
            dependent=component("Home", "Feature", "Contract", "Implementation"),
            dependency=component(
                "Http", "Service", "Contract", "Implementation",
                default_dependencies={IMPLEMENTATION: "Implementation"},
            ),
            project_defaults={IMPLEMENTATION: "Contract"},
        )
        resolver = DependencyResolver(strategies=[project_defaults, component_defaults])
        assert resolver.resolve(context) == {IMPLEMENTATION: "Contract"}

    def test_default_mapping_returns_a_copy(self):
        defaults = {CONTRACT: "Contract"}
        context = ResolutionContext(
            dependent=component("Home", "Feature", "Contract"),
            dependency=component("Http", "Service", "Contract"),
            project_defaults=defaults,
        )
        mapping = DependencyResolver().default_mapping(context)
        mapping.clear()
        assert defaults == {CONTRACT: "Contract"}
