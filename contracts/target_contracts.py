"""Naming and target-type contracts shared by every other contract."""

from enum import Enum
from typing import Annotated, Any, Dict, List

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer


class Name(BaseModel):
    """Composite component key; the {given, family} pair is unique per document."""

    model_config = {"frozen": True}

    given: str = Field(..., description="Given part of the name, e.g. 'Wordpress'")
    family: str = Field(..., description="Owning family, e.g. 'Repository'")

    @property
    def full(self) -> str:
        return self.given + self.family

    @property
    def sort_key(self) -> tuple:
        return (self.full, self.given, self.family)

    def __lt__(self, other: "Name") -> bool:
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        return self.full


class PackageTargetType(BaseModel):
    """A target type on the dependent side of an edge, optionally its test target."""

    model_config = {"frozen": True}

    name: str = Field(..., description="Target type name, e.g. 'Contract'")
    is_tests: bool = Field(default=False, description="Refers to the paired test target")

    @property
    def title(self) -> str:
        return self.name + "Tests" if self.is_tests else self.name

    def __lt__(self, other: "PackageTargetType") -> bool:
        return (self.name, self.is_tests) < (other.name, other.is_tests)

    def __str__(self) -> str:
        return self.title


class LibraryType(str, Enum):
    """Linkage of a library product."""
    STATIC = "static"
    DYNAMIC = "dynamic"
    UNDEFINED = "undefined"


class IOSVersion(str, Enum):
    """Minimum iOS deployment target."""
    V13 = "v13"
    V14 = "v14"
    V15 = "v15"
    V16 = "v16"
    V17 = "v17"


class MacOSVersion(str, Enum):
    """Minimum macOS deployment target."""
    V10_15 = "v10_15"
    V11 = "v11"
    V12 = "v12"
    V13 = "v13"
    V14 = "v14"


def _pairs_to_mapping(value: Any) -> Any:
    if isinstance(value, list):
        return {
            PackageTargetType.model_validate(item["target_type"]): item["value"]
            for item in value
        }
    return value


def _mapping_to_pairs(value: Dict[PackageTargetType, str]) -> List[Dict[str, Any]]:
    return [
        {"target_type": key.model_dump(), "value": value[key]}
        for key in sorted(value)
    ]


# Mapping keyed by target type. Stored as a dict, serialised as a sorted
# list of pairs because JSON objects only allow string keys.
TargetTypeMapping = Annotated[
    Dict[PackageTargetType, str],
    BeforeValidator(_pairs_to_mapping),
    PlainSerializer(_mapping_to_pairs, return_type=List[Dict[str, Any]]),
]
