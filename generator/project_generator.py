"""Project Generator - runs one generation pass over a document.

A pass:
1. Takes a snapshot of the document
2. Extracts one package descriptor per component
3. Checks the package graph (cycles, exclusion rules)
4. Hands each package to the writer collaborator
5. Runs the custom script, if the project configures one

Writes are independent and best-effort: a failing package does not stop
the others, and every failure is reported once as a GenerationError.
Nothing already written is rolled back.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

from contracts import (
    GenerationError,
    PackageWithPath,
    PhoenixDocument,
    ScriptExecutionError,
)
from serializer import PackageStringProvider

from .component_extractor import ComponentExtractor
from .graph_checks import check_graph
from .package_writer import FileSystemPackageWriter, PackageWriter
from .script_runner import ScriptRunner, ShellScriptRunner


logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    """Record of a generation pass."""
    root: Path
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    packages: List[PackageWithPath] = field(default_factory=list)
    written: Dict[str, List[Path]] = field(default_factory=dict)
    script_path: Optional[Path] = None
    script_output: Optional[str] = None
    failures: List[Exception] = field(default_factory=list)
    status: str = "running"


class ProjectGenerator:
    """Compiles a document into manifests under a workspace root."""

    def __init__(
        self,
        extractor: Optional[ComponentExtractor] = None,
        string_provider: Optional[PackageStringProvider] = None,
        writer: Optional[PackageWriter] = None,
        script_runner: Optional[ScriptRunner] = None,
        fail_on_cycles: bool = True,
    ):
        """Initialize the generator.

        Args:
            extractor: Graph extractor producing package descriptors
            string_provider: Manifest serializer used by `render` and the default writer
            writer: Filesystem writer collaborator
            script_runner: Runner for the project's custom script
            fail_on_cycles: Raise DependencyCycleError on package cycles instead of warning
        """
        self.extractor = extractor or ComponentExtractor()
        self.string_provider = string_provider or PackageStringProvider()
        self.writer = writer or FileSystemPackageWriter(self.string_provider)
        self.script_runner = script_runner or ShellScriptRunner()
        self.fail_on_cycles = fail_on_cycles

    def extract(self, document: PhoenixDocument) -> List[PackageWithPath]:
        """Extract and check packages from a snapshot of `document`."""
        snapshot = document.model_copy(deep=True)
        packages = self.extractor.packages(snapshot)
        check_graph(snapshot, packages, fail_on_cycles=self.fail_on_cycles)
        return packages

    def render(self, document: PhoenixDocument) -> Dict[str, str]:
        """Render every manifest without touching the filesystem.

        Returns:
            Manifest text keyed by relative package path, in path order
        """
        packages = self.extract(document)
        return {
            item.path: self.string_provider.string(item.package)
            for item in sorted(packages, key=lambda p: p.path)
        }

    def generate(self, document: PhoenixDocument, folder: Union[str, Path]) -> GenerationReport:
        """Run a full generation pass into `folder`.

        Args:
            document: Document to compile; a snapshot is taken first
            folder: Workspace root every package path is relative to

        Returns:
            GenerationReport of the pass

        Raises:
            DependencyCycleError: packages form a cycle and fail_on_cycles is set
            GenerationError: one or more writes or the script failed
        """
        root = Path(folder).resolve()
        report = GenerationReport(root=root)
        snapshot = document.model_copy(deep=True)
        report.packages = self.extract(snapshot)

        for item in report.packages:
            try:
                report.written[item.path] = self.writer.write(item.package, root / item.path)
                logger.debug("Wrote %s", item.path)
            except Exception as e:
                logger.error("Failed to write %s: %s", item.path, e)
                report.failures.append(e)

        script = snapshot.project_configuration.custom_script_path
        if script:
            report.script_path = root / script
            if report.failures:
                logger.warning("Skipping script %s after failed writes", report.script_path)
            else:
                try:
                    report.script_output = self.script_runner.run(report.script_path, cwd=root)
                except ScriptExecutionError as e:
                    logger.error("%s", e)
                    report.failures.append(e)

        report.completed_at = datetime.now()
        if report.failures:
            report.status = "error"
            raise GenerationError(report.failures, report=report)

        report.status = "completed"
        logger.info("Generated %d package(s) into %s", len(report.packages), root)
        return report


def generate_project(
    document: PhoenixDocument,
    folder: Union[str, Path],
    fail_on_cycles: bool = True,
) -> GenerationReport:
    """Convenience function generating a document with the default collaborators.

    Args:
        document: Document to compile
        folder: Workspace root
        fail_on_cycles: Raise on package cycles instead of warning

    Returns:
        GenerationReport of the pass
    """
    generator = ProjectGenerator(fail_on_cycles=fail_on_cycles)
    return generator.generate(document, folder)
