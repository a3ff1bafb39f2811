"""Loading and saving documents as JSON."""

import json
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from contracts import (
    DocumentLoadError,
    PackageConfiguration,
    PackageTargetType,
    PhoenixDocument,
    ProjectConfiguration,
)


def new_document(
    target_types: Iterable[str],
    tested_target_types: Optional[Iterable[str]] = None,
) -> PhoenixDocument:
    """Create an empty document declaring the given target types.

    Args:
        target_types: Target type names, in declaration order
        tested_target_types: Names among `target_types` that get a paired test target

    Returns:
        New PhoenixDocument without families. Every target type defaults to
        depending on the same target type of its dependencies.
    """
    names = list(target_types)
    tested = set(tested_target_types or [])
    return PhoenixDocument(
        project_configuration=ProjectConfiguration(
            package_configurations=[
                PackageConfiguration(name=name, has_tests=name in tested)
                for name in names
            ],
            default_dependencies={PackageTargetType(name=name): name for name in names},
        ),
    )


def load_document(path: Union[str, Path]) -> PhoenixDocument:
    """Read a document from a JSON file.

    Raises:
        DocumentLoadError: the file is missing, not JSON, or not a valid document
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"Cannot read {path}: {e}") from e
    try:
        return PhoenixDocument.model_validate_json(content)
    except ValidationError as e:
        raise DocumentLoadError(f"Invalid document {path}: {e}") from e


def save_document(document: PhoenixDocument, path: Union[str, Path]) -> Path:
    """Write a document as indented JSON, creating parent folders."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = document.model_dump(mode="json")
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path
