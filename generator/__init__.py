"""Generator module: extraction, graph checks and generation passes."""

from .family_folder_name import FamilyFolderNameProvider
from .component_extractor import ComponentExtractor, target_name
from .graph_checks import check_graph, duplicate_paths, exclusion_violations, find_cycle, package_graph
from .package_writer import PackageWriter, FileSystemPackageWriter
from .script_runner import ScriptRunner, ShellScriptRunner
from .project_generator import GenerationReport, ProjectGenerator, generate_project

__all__ = [
    "FamilyFolderNameProvider",
    "ComponentExtractor",
    "target_name",
    "check_graph",
    "duplicate_paths",
    "exclusion_violations",
    "find_cycle",
    "package_graph",
    "PackageWriter",
    "FileSystemPackageWriter",
    "ScriptRunner",
    "ShellScriptRunner",
    "GenerationReport",
    "ProjectGenerator",
    "generate_project",
]
