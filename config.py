"""Configuration settings for the Phoenix manifest compiler."""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List


class Settings(BaseSettings):
    """Global settings for Phoenix.

    Settings can be overridden via environment variables with PHOENIX_ prefix.
    Example: PHOENIX_SWIFT_TOOLS_VERSION=5.9
    """

    # Manifest output
    swift_tools_version: str = Field(
        default="5.6",
        description="swift-tools-version written in every manifest header"
    )
    manifest_file_name: str = Field(
        default="Package.swift",
        description="File name of the generated manifest"
    )
    create_source_stubs: bool = Field(
        default=True,
        description="Create Sources/ and Tests/ folders with a placeholder file when missing"
    )

    # Graph checks
    fail_on_cycles: bool = Field(
        default=True,
        description="Abort generation when local dependencies form a package cycle; warn otherwise"
    )

    # Custom script
    script_shell: str = Field(
        default="/bin/sh",
        description="Shell used to execute the project's custom script"
    )
    script_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Maximum run time of the custom script"
    )

    # New documents
    default_target_types: List[str] = Field(
        default=["Contract", "Implementation", "Mock"],
        description="Target types declared by a new document"
    )
    default_tested_target_types: List[str] = Field(
        default=["Implementation"],
        description="Target types of a new document that get a paired test target"
    )

    log_level: str = Field(
        default="INFO",
        description="Log level for the command line interface"
    )

    model_config = {
        "env_prefix": "PHOENIX_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Create singleton instance
settings = Settings()
