"""Exception hierarchy for the Phoenix manifest compiler."""

from typing import Any, List, Optional


class PhoenixError(Exception):
    """Base class for every error raised by the compiler."""


class DocumentError(PhoenixError):
    """A mutation of the document was rejected."""


class DuplicateNameError(DocumentError):
    """A component name cannot be used for a new component."""


class EmptyGivenNameError(DuplicateNameError):
    """Given name cannot be empty."""

    def __init__(self):
        super().__init__("Given name cannot be empty")


class EmptyFamilyNameError(DuplicateNameError):
    """Component must be part of a family."""

    def __init__(self):
        super().__init__("Component must be part of a family")


class NameInUseError(DuplicateNameError):
    """The {given, family} pair already exists in the document."""

    def __init__(self, given: str, family: str):
        self.given = given
        self.family = family
        super().__init__(f"Name already in use: {given} ({family})")


class EmptyURLError(DocumentError):
    """Remote component url cannot be empty."""

    def __init__(self):
        super().__init__("Remote component url cannot be empty")


class RemoteComponentExistsError(DocumentError):
    """A remote component with the same url is already registered."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Remote component already exists: {url}")


class DocumentLoadError(PhoenixError):
    """A document file could not be read or validated."""


class DependencyCycleError(PhoenixError):
    """Local dependencies form a cycle between generated packages."""

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__("Dependency cycle detected: " + " -> ".join(cycle))


class ScriptExecutionError(PhoenixError):
    """The custom generation script could not be read or exited with an error."""

    def __init__(self, path: str, message: str, output: Optional[str] = None):
        self.path = path
        self.output = output
        super().__init__(f"Script {path}: {message}")


class GenerationError(PhoenixError):
    """One or more failures happened while writing a generation pass.

    Writes are independent and best-effort, so every failure of the pass
    is collected here instead of stopping at the first one.
    """

    def __init__(self, failures: List[Exception], report: Optional[Any] = None):
        self.failures = failures
        self.report = report
        lines = [f"{len(failures)} failure(s) during generation:"]
        lines.extend(f"  - {failure}" for failure in failures)
        super().__init__("\n".join(lines))
