"""Tests for the Graph Extractor and family folder naming."""

import pytest

from contracts import (
    ExternalDependencyName,
    ExternalDependencyVersion,
    IOSVersion,
    LibraryType,
    ModulePackageDependency,
    Name,
    PackageTargetType,
    RemoteDependency,
    RemotePackageDependency,
    ResourcesType,
    ComponentResources,
    TargetDependency,
)
from document import PhoenixDocumentStore, new_document
from generator import ComponentExtractor, FamilyFolderNameProvider


CONTRACT = PackageTargetType(name="Contract")
IMPLEMENTATION = PackageTargetType(name="Implementation")
IMPLEMENTATION_TESTS = PackageTargetType(name="Implementation", is_tests=True)

A = Name(given="A", family="Feature")
B = Name(given="B", family="Feature")


def example_store() -> PhoenixDocumentStore:
    """Project with Contract and tested Implementation; A depends on B."""
    document = new_document(["Contract", "Implementation"], ["Implementation"])
    document.project_configuration.default_dependencies = {
        CONTRACT: "Contract",
        IMPLEMENTATION: "Implementation",
    }
    store = PhoenixDocumentStore(document)
    store.add_component(A)
    store.add_component(B)
    store.add_local_dependency(A, B)
    return store


def packages_by_name(store: PhoenixDocumentStore) -> dict:
    return {p.package.name: p for p in ComponentExtractor().packages(store.snapshot())}


def targets_by_name(package) -> dict:
    return {t.name: t for t in package.targets}


class TestFamilyFolderNameProvider:
    """Test default family folders."""

    @pytest.mark.parametrize("family, folder", [
        ("Repository", "Repositories"),
        ("Feature", "Features"),
        ("Service", "Services"),
        ("Gateway", "Gateways"),
        ("Cache", "Caches"),
        ("Address", "Addresses"),
    ])
    def test_plural_folder_names(self, family, folder):
        assert FamilyFolderNameProvider().folder_name(family) == folder

    def test_override(self):
        store = example_store()
        store.update_family_folder("Feature", "UI/Screens")
        assert FamilyFolderNameProvider().folder(store.get_family("Feature")) == "UI/Screens"


class TestExample:
    """Contract/Implementation example with a paired test target."""

    def test_one_package_per_component(self):
        packages = packages_by_name(example_store())
        assert set(packages) == {"AFeature", "BFeature"}
        assert packages["AFeature"].path == "Features/AFeature"

    def test_targets_and_products(self):
        package = packages_by_name(example_store())["AFeature"].package
        assert set(targets_by_name(package)) == {
            "AFeatureContract",
            "AFeatureImplementation",
            "AFeatureImplementationTests",
        }
        assert sorted(p.name for p in package.products) == ["AFeatureContract", "AFeatureImplementation"]
        assert all(p.type is None for p in package.products)

    def test_implementation_depends_on_implementation(self):
        package = packages_by_name(example_store())["AFeature"].package
        targets = targets_by_name(package)
        assert targets["AFeatureImplementation"].dependencies == [
            TargetDependency(name="BFeatureImplementation"),
        ]
        assert targets["AFeatureContract"].dependencies == [TargetDependency(name="BFeatureContract")]

    def test_test_target_stays_independent(self):
        targets = targets_by_name(packages_by_name(example_store())["AFeature"].package)
        tests = targets["AFeatureImplementationTests"]
        assert tests.is_test
        assert tests.dependencies == [TargetDependency(name="AFeatureImplementation")]

    def test_package_dependency_by_relative_path(self):
        package = packages_by_name(example_store())["AFeature"].package
        assert package.dependencies == [ModulePackageDependency(path="../BFeature", name="BFeature")]

    def test_dependency_without_edges_has_no_package_dependencies(self):
        package = packages_by_name(example_store())["BFeature"].package
        assert package.dependencies == []


class TestMappings:
    """Target-level edge rules."""

    def test_test_target_mapping(self):
        store = example_store()
        edge = store.get_component(A).local_dependencies[0]
        store.update_target_mapping(A, edge, IMPLEMENTATION_TESTS, "Contract")
        targets = targets_by_name(packages_by_name(store)["AFeature"].package)
        assert set(targets["AFeatureImplementationTests"].dependencies) == {
            TargetDependency(name="AFeatureImplementation"),
            TargetDependency(name="BFeatureContract"),
        }

    def test_cleared_mapping_removes_package_dependency(self):
        store = example_store()
        edge = store.get_component(A).local_dependencies[0]
        store.update_target_mapping(A, edge, CONTRACT, None)
        store.update_target_mapping(A, edge, IMPLEMENTATION, None)
        assert packages_by_name(store)["AFeature"].package.dependencies == []

    def test_mapping_to_removed_module_is_skipped(self):
        store = example_store()
        store.remove_module_type(B, "Implementation")
        targets = targets_by_name(packages_by_name(store)["AFeature"].package)
        assert targets["AFeatureImplementation"].dependencies == []
        assert targets["AFeatureContract"].dependencies == [TargetDependency(name="BFeatureContract")]

    def test_dependency_on_removed_component_is_skipped(self):
        store = example_store()
        store.remove_component(B)
        package = packages_by_name(store)["AFeature"].package
        assert package.dependencies == []

    def test_cross_folder_relative_path(self):
        store = example_store()
        http = Name(given="Http", family="Service")
        store.add_component(http)
        store.update_family_folder("Service", "Core/Services")
        store.add_local_dependency(A, http)
        package = packages_by_name(store)["AFeature"].package
        paths = sorted(d.path for d in package.dependencies)
        assert paths == ["../../Core/Services/HttpService", "../BFeature"]

    def test_ignore_suffix_names(self):
        store = example_store()
        store.update_family_ignore_suffix("Feature", True)
        packages = packages_by_name(store)
        assert packages["A"].path == "Features/A"
        targets = targets_by_name(packages["A"].package)
        assert targets["AImplementation"].dependencies == [TargetDependency(name="BImplementation")]


class TestModules:
    """Linkage, unknown target types, platforms and resources."""

    def test_linkage_carried_through(self):
        store = example_store()
        store.set_library_type(A, "Contract", LibraryType.DYNAMIC)
        package = packages_by_name(store)["AFeature"].package
        products = {p.name: p.type for p in package.products}
        assert products == {"AFeatureContract": LibraryType.DYNAMIC, "AFeatureImplementation": None}

    def test_unconfigured_target_type_still_emitted(self):
        store = example_store()
        store.add_module_type(A, "Mock")
        targets = targets_by_name(packages_by_name(store)["AFeature"].package)
        assert "AFeatureMock" in targets
        assert "AFeatureMockTests" not in targets

    def test_platforms(self):
        store = example_store()
        store.set_ios_version(A, IOSVersion.V15)
        package = packages_by_name(store)["AFeature"].package
        assert package.ios_version == IOSVersion.V15
        assert package.macos_version is None

    def test_resources_attach_to_listed_targets(self):
        store = example_store()
        store.update_resources(A, [
            ComponentResources(folder_name="Assets", type=ResourcesType.COPY, targets=[IMPLEMENTATION]),
        ])
        targets = targets_by_name(packages_by_name(store)["AFeature"].package)
        assert [r.folder_name for r in targets["AFeatureImplementation"].resources] == ["Assets"]
        assert targets["AFeatureContract"].resources == []


class TestRemote:
    """Remote edges."""

    def test_remote_product_on_enabled_targets(self):
        store = example_store()
        dependency = RemoteDependency(
            url="https://github.com/example/kit",
            name=ExternalDependencyName(name="Kit", package="kit-swift"),
            version=ExternalDependencyVersion.exact("2.1.0"),
            target_types=[IMPLEMENTATION],
        )
        store.add_remote_dependency(A, dependency)
        package = packages_by_name(store)["AFeature"].package
        targets = targets_by_name(package)

        assert TargetDependency(name="Kit", package="kit-swift") in targets["AFeatureImplementation"].dependencies
        assert TargetDependency(name="Kit", package="kit-swift") not in targets["AFeatureContract"].dependencies
        remote_dependencies = [d for d in package.dependencies if isinstance(d, RemotePackageDependency)]
        assert [d.url for d in remote_dependencies] == ["https://github.com/example/kit"]

    def test_remote_without_enabled_targets_is_not_declared(self):
        store = example_store()
        store.add_remote_dependency(A, RemoteDependency(
            url="https://github.com/example/kit",
            name=ExternalDependencyName(name="Kit"),
            version=ExternalDependencyVersion.from_version("1.0.0"),
        ))
        package = packages_by_name(store)["AFeature"].package
        assert not any(isinstance(d, RemotePackageDependency) for d in package.dependencies)

    def test_two_products_of_one_package_declare_it_once(self):
        store = example_store()
        for product in ("Kit", "KitUI"):
            store.add_remote_dependency(A, RemoteDependency(
                url="https://github.com/example/kit",
                name=ExternalDependencyName(name=product),
                version=ExternalDependencyVersion.from_version("1.0.0"),
                target_types=[CONTRACT],
            ))
        package = packages_by_name(store)["AFeature"].package
        remote_dependencies = [d for d in package.dependencies if isinstance(d, RemotePackageDependency)]
        assert len(remote_dependencies) == 1
