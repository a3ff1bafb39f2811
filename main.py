#!/usr/bin/env python3
"""Phoenix CLI - edit component documents and generate package manifests.

Usage:
    # Create a document declaring the default target types
    python main.py new ./Modules/workspace.json

    # Add components and a dependency between them
    python main.py add-component ./Modules/workspace.json Wordpress Repository
    python main.py add-component ./Modules/workspace.json Home Feature
    python main.py add-dependency ./Modules/workspace.json Home Feature Wordpress Repository

    # Link Home's Implementation target to Wordpress's Contract target
    python main.py set-mapping ./Modules/workspace.json Home Feature Wordpress Repository Implementation Contract

    # Print the manifests, or write them next to the document
    python main.py render ./Modules/workspace.json
    python main.py generate ./Modules/workspace.json
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax
from rich.tree import Tree

from config import settings
from contracts import (
    ExternalDependencyName,
    ExternalDependencyVersion,
    GenerationError,
    Name,
    PackageTargetType,
    PhoenixError,
    RemoteDependency,
    display_name,
)
from document import PhoenixDocumentStore, load_document, new_document, save_document
from generator import ComponentExtractor, FileSystemPackageWriter, ProjectGenerator, ShellScriptRunner
from serializer import PackageStringProvider


console = Console()


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def build_generator(allow_cycles: bool = False) -> ProjectGenerator:
    """Project generator wired from the application settings."""
    string_provider = PackageStringProvider(settings.swift_tools_version)
    return ProjectGenerator(
        extractor=ComponentExtractor(),
        string_provider=string_provider,
        writer=FileSystemPackageWriter(
            string_provider,
            manifest_file_name=settings.manifest_file_name,
            create_source_stubs=settings.create_source_stubs,
        ),
        script_runner=ShellScriptRunner(
            shell=settings.script_shell,
            timeout_seconds=settings.script_timeout_seconds,
        ),
        fail_on_cycles=settings.fail_on_cycles and not allow_cycles,
    )


def open_store(document_path: str) -> PhoenixDocumentStore:
    return PhoenixDocumentStore(load_document(document_path))


def fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def cli(verbose: bool):
    """Phoenix: compile component documents into Swift package manifests."""
    configure_logging(verbose)


@cli.command()
@click.argument("document_path", type=click.Path(dir_okay=False))
@click.option(
    "--target-type", "-t", "target_types",
    multiple=True,
    help="Declared target type (repeatable, default from settings)"
)
@click.option(
    "--tested", "tested_types",
    multiple=True,
    help="Target type that gets a paired test target (repeatable)"
)
@click.option("--force", is_flag=True, help="Overwrite an existing document")
def new(document_path: str, target_types: Tuple[str, ...], tested_types: Tuple[str, ...], force: bool):
    """Create an empty document."""
    path = Path(document_path)
    if path.exists() and not force:
        fail(f"{path} already exists (use --force to overwrite)")
    document = new_document(
        target_types or settings.default_target_types,
        tested_types or settings.default_tested_target_types,
    )
    save_document(document, path)
    console.print(f"[green]Created[/green] {path}")


@cli.command()
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
def show(document_path: str):
    """Show families, components and their dependencies."""
    try:
        store = open_store(document_path)
    except PhoenixError as e:
        fail(str(e))

    configuration = store.document.project_configuration
    types = ", ".join(
        f"{c.name}{' (+Tests)' if c.has_tests else ''}" for c in configuration.package_configurations
    )
    console.print(Panel.fit(
        f"[bold blue]{Path(document_path).name}[/bold blue]\n[dim]Target types:[/dim] {types or 'none'}",
        border_style="blue"
    ))

    extractor = ComponentExtractor()
    tree = Tree("[bold]Families[/bold]")
    for components_family in store.families:
        family = components_family.family
        folder = extractor.folder_name_provider.folder(family)
        branch = tree.add(f"[bold]{family.name}[/bold] [dim]{folder}/[/dim]")
        for component in components_family.components:
            node = branch.add(display_name(component.name, family))
            for dependency in component.local_dependencies:
                mapping = ", ".join(
                    f"{key.title}->{value}" for key, value in sorted(dependency.target_types.items())
                )
                node.add(f"[green]{store.title(dependency.name)}[/green] [dim]{mapping}[/dim]")
            for dependency in component.remote_dependencies:
                node.add(f"[yellow]{dependency.name.name}[/yellow] [dim]{dependency.url}[/dim]")
    if not store.families:
        tree.add("[dim]0 components[/dim]")
    console.print(tree)


@cli.command("add-component")
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("given")
@click.argument("family")
@click.option("--template", nargs=2, default=None, help="GIVEN FAMILY of a component to duplicate")
def add_component(document_path: str, given: str, family: str, template: Optional[Tuple[str, str]]):
    """Add a component to a family (the family is created when missing)."""
    try:
        store = open_store(document_path)
        template_component = None
        if template:
            template_component = store.get_component(Name(given=template[0], family=template[1]))
            if template_component is None:
                fail(f"Template component {template[0]}{template[1]} not found")
        component = store.add_component(Name(given=given, family=family), template=template_component)
        save_document(store.document, document_path)
    except PhoenixError as e:
        fail(str(e))
    console.print(f"[green]Added[/green] {store.title(component.name)}")


@cli.command("remove-component")
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("given")
@click.argument("family")
def remove_component(document_path: str, given: str, family: str):
    """Remove a component (and its family when it becomes empty)."""
    try:
        store = open_store(document_path)
        store.remove_component(Name(given=given, family=family))
        save_document(store.document, document_path)
    except PhoenixError as e:
        fail(str(e))
    console.print(f"[green]Removed[/green] {given}{family}")


@cli.command("add-dependency")
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("given")
@click.argument("family")
@click.argument("dependency_given")
@click.argument("dependency_family")
def add_dependency(document_path: str, given: str, family: str, dependency_given: str, dependency_family: str):
    """Add a local dependency using the cascading default target mapping."""
    name = Name(given=given, family=family)
    dependency_name = Name(given=dependency_given, family=dependency_family)
    try:
        store = open_store(document_path)
        if store.get_component(name) is None:
            fail(f"Component {name} not found")
        if store.get_component(dependency_name) is None:
            fail(f"Component {dependency_name} not found")
        store.add_local_dependency(name, dependency_name)
        save_document(store.document, document_path)
    except PhoenixError as e:
        fail(str(e))
    console.print(f"[green]{store.title(name)}[/green] now depends on [green]{store.title(dependency_name)}[/green]")


@cli.command("add-remote-dependency")
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("given")
@click.argument("family")
@click.argument("url")
@click.argument("product")
@click.option("--package", default=None, help="Package name when it differs from the product")
@click.option("--version", "version_value", default="1.0.0", help="Version or branch name")
@click.option(
    "--kind",
    type=click.Choice(["from", "exact", "branch"]),
    default="from",
    help="Version requirement kind"
)
@click.option("--target-type", "-t", "target_types", multiple=True, help="Target type linking the product")
def add_remote_dependency(
    document_path: str,
    given: str,
    family: str,
    url: str,
    product: str,
    package: Optional[str],
    version_value: str,
    kind: str,
    target_types: Tuple[str, ...],
):
    """Add a remote package product dependency."""
    name = Name(given=given, family=family)
    dependency = RemoteDependency(
        url=url,
        name=ExternalDependencyName(name=product, package=package),
        version=ExternalDependencyVersion(kind=kind, value=version_value),
        target_types=[PackageTargetType(name=t) for t in target_types],
    )
    try:
        store = open_store(document_path)
        if store.get_component(name) is None:
            fail(f"Component {name} not found")
        store.add_remote_dependency(name, dependency)
        save_document(store.document, document_path)
    except PhoenixError as e:
        fail(str(e))
    console.print(f"[green]{store.title(name)}[/green] now depends on [yellow]{product}[/yellow]")


@cli.command("set-mapping")
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("given")
@click.argument("family")
@click.argument("dependency_given")
@click.argument("dependency_family")
@click.argument("target_type")
@click.argument("value", required=False)
@click.option("--tests", is_flag=True, help="Map the paired test target of TARGET_TYPE")
def set_mapping(
    document_path: str,
    given: str,
    family: str,
    dependency_given: str,
    dependency_family: str,
    target_type: str,
    value: Optional[str],
    tests: bool,
):
    """Set which target of a local dependency TARGET_TYPE links (no VALUE clears it)."""
    name = Name(given=given, family=family)
    dependency_name = Name(given=dependency_given, family=dependency_family)
    try:
        store = open_store(document_path)
        component = store.get_component(name)
        edges = component.local_dependencies if component is not None else []
        edge = next((d for d in edges if d.name == dependency_name), None)
        if edge is None:
            fail(f"{name} does not depend on {dependency_name}")
        store.update_target_mapping(name, edge, PackageTargetType(name=target_type, is_tests=tests), value)
        save_document(store.document, document_path)
    except PhoenixError as e:
        fail(str(e))
    console.print(f"[green]Updated[/green] {store.title(name)} -> {store.title(dependency_name)}")


@cli.command("set-default")
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("target_type")
@click.argument("value", required=False)
@click.option("--tests", is_flag=True, help="Default for the paired test target of TARGET_TYPE")
@click.option("--family", "family_name", default=None, help="Set the family default instead of the project one")
def set_default(
    document_path: str,
    target_type: str,
    value: Optional[str],
    tests: bool,
    family_name: Optional[str],
):
    """Set the default mapping offered to new dependencies (no VALUE clears it)."""
    key = PackageTargetType(name=target_type, is_tests=tests)
    try:
        store = open_store(document_path)
        if family_name is None:
            defaults = store.document.project_configuration.default_dependencies
            if value is None:
                defaults.pop(key, None)
            else:
                defaults[key] = value
        elif store.get_family(family_name) is None:
            fail(f"Family {family_name} not found")
        else:
            store.update_family_default_dependency(family_name, key, value)
        save_document(store.document, document_path)
    except PhoenixError as e:
        fail(str(e))
    console.print(f"[green]Default[/green] {key.title} -> {value or 'none'}")


@cli.command()
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--path", "package_path", default=None, help="Only render the package at this relative path")
@click.option("--allow-cycles", is_flag=True, help="Warn about dependency cycles instead of failing")
def render(document_path: str, package_path: Optional[str], allow_cycles: bool):
    """Print generated manifests without writing anything."""
    try:
        manifests = build_generator(allow_cycles).render(load_document(document_path))
    except PhoenixError as e:
        fail(str(e))

    if package_path is not None:
        if package_path not in manifests:
            fail(f"No package at {package_path}")
        manifests = {package_path: manifests[package_path]}

    for path, text in manifests.items():
        console.print(Panel(Syntax(text, "swift"), title=path, border_style="blue"))


@cli.command()
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o", "output_dir",
    default=None,
    help="Workspace root (default: the document's folder)"
)
@click.option("--allow-cycles", is_flag=True, help="Warn about dependency cycles instead of failing")
def generate(document_path: str, output_dir: Optional[str], allow_cycles: bool):
    """Generate every package manifest and run the custom script."""
    root = Path(output_dir).resolve() if output_dir else Path(document_path).resolve().parent
    console.print(f"\n[bold]Generating packages...[/bold]")
    console.print(f"  [dim]Document:[/dim] {document_path}")
    console.print(f"  [dim]Workspace:[/dim] {root}")

    try:
        report = build_generator(allow_cycles).generate(load_document(document_path), root)
    except GenerationError as e:
        for failure in e.failures:
            console.print(f"  [red]✗[/red] {failure}")
        fail(f"{len(e.failures)} failure(s) during generation")
    except PhoenixError as e:
        fail(str(e))

    console.print("\n" + "=" * 60)
    console.print(f"[green]Status:[/green] {report.status}")
    console.print(f"[green]Packages:[/green] {len(report.packages)}")
    for item in report.packages:
        console.print(f"  - {item.path}")
    if report.script_path:
        console.print(f"[green]Script:[/green] {report.script_path}")
    console.print("=" * 60)


if __name__ == "__main__":
    cli()
