"""Filesystem writer collaborator for generated packages."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from contracts import SwiftPackage
from serializer import PackageStringProvider


class PackageWriter(ABC):
    """Abstract base class for writers persisting a package at a directory."""

    @abstractmethod
    def write(self, package: SwiftPackage, directory: Path) -> List[Path]:
        """Write the manifest of `package` (and any layout) into `directory`.

        Args:
            package: Descriptor to write
            directory: Absolute package directory

        Returns:
            Files written
        """
        pass


class FileSystemPackageWriter(PackageWriter):
    """Writes Package.swift and, optionally, placeholder sources for each target."""

    def __init__(
        self,
        string_provider: Optional[PackageStringProvider] = None,
        manifest_file_name: str = "Package.swift",
        create_source_stubs: bool = True,
    ):
        self.string_provider = string_provider or PackageStringProvider()
        self.manifest_file_name = manifest_file_name
        self.create_source_stubs = create_source_stubs

    def write(self, package: SwiftPackage, directory: Path) -> List[Path]:
        directory.mkdir(parents=True, exist_ok=True)
        manifest_path = directory / self.manifest_file_name
        manifest_path.write_text(self.string_provider.string(package), encoding="utf-8")
        written = [manifest_path]
        if self.create_source_stubs:
            written.extend(self._write_stubs(package, directory))
        return written

    def _write_stubs(self, package: SwiftPackage, directory: Path) -> List[Path]:
        """Create a placeholder source per target folder that has no files yet."""
        written = []
        for target in package.targets:
            root = "Tests" if target.is_test else "Sources"
            target_dir = directory / root / target.name
            target_dir.mkdir(parents=True, exist_ok=True)
            if any(target_dir.iterdir()):
                continue
            stub = target_dir / f"{target.name}.swift"
            if target.is_test:
                stub.write_text(
                    f"import XCTest\n@testable import {target.name[:-len('Tests')]}\n\n"
                    f"final class {target.name}: XCTestCase {{\n}}\n",
                    encoding="utf-8",
                )
            else:
                stub.write_text(f"// {target.name}\n", encoding="utf-8")
            written.append(stub)
        return written
