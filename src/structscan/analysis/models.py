"""Analysis models — L0 types for the structural inventory.

L0 constraint: Only import from pydantic, datetime, stdlib.
NO imports from other structscan.* modules.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# Return type recorded for members without a `->` annotation.
NO_RETURN_TYPE = "None"


class FileClassification(StrEnum):
    """Architectural role inferred for a source file."""

    UNKNOWN = "unknown"
    TEST = "test"
    VIEW = "view"
    MODEL = "model"
    CONTROLLER = "controller"
    SERVICE = "service"
    REPOSITORY = "repository"
    CONFIG = "config"


class TypeKind(StrEnum):
    """Kind of type container."""

    CLASS = "class"
    MODULE = "module"  # synthetic container for module-level functions


class MemberKind(StrEnum):
    """Kind of member."""

    METHOD = "method"
    FUNCTION = "function"


class Visibility(StrEnum):
    """Access visibility, derived from the leading-underscore convention."""

    PUBLIC = "public"
    PRIVATE = "private"


class CodeMemberInfo(BaseModel):
    """A function or method found by the member extractor."""

    name: str
    kind: MemberKind
    return_type: str = NO_RETURN_TYPE
    is_async: bool = False
    is_static: bool = False
    visibility: Visibility = Visibility.PUBLIC
    decorators: list[str] = Field(default_factory=list)
    parameters: list[str] = Field(default_factory=list)
    signature: str
    start_line: int
    end_line: int
    docstring: str | None = None
    # Source slice, only needed while extracting call sites.
    body: str = Field(default="", exclude=True, repr=False)

    model_config = ConfigDict(frozen=True)


class CodeTypeInfo(BaseModel):
    """A declared class, or the synthetic module container."""

    name: str
    full_name: str
    kind: TypeKind = TypeKind.CLASS
    base_type: str | None = None
    interfaces: list[str] = Field(default_factory=list)
    start_line: int
    end_line: int
    docstring: str | None = None
    members: list[CodeMemberInfo] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class CallSite(BaseModel):
    """An unresolved textual call expression."""

    file_path: str
    caller_type: str
    caller_member: str
    called_type: str
    called_member: str
    line: int

    model_config = ConfigDict(frozen=True)


class FileAnalysis(BaseModel):
    """Complete structural analysis of a single source file."""

    file_path: str
    relative_path: str
    file_name: str
    size_bytes: int
    estimated_tokens: int
    types: list[CodeTypeInfo] = Field(default_factory=list)
    imports: list[str] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    classification: FileClassification = FileClassification.UNKNOWN

    model_config = ConfigDict(frozen=True)


class FileReport(BaseModel):
    """One file's analysis together with the call sites observed in it."""

    analysis: FileAnalysis
    call_sites: list[CallSite] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class SkippedFile(BaseModel):
    """A discovered file that could not be read."""

    path: str
    error: str

    model_config = ConfigDict(frozen=True)


class ProjectAnalysis(BaseModel):
    """Analysis of every Python file under a project root."""

    root: str
    files: list[FileAnalysis]
    call_sites: list[CallSite] = Field(default_factory=list)
    skipped: list[SkippedFile] = Field(default_factory=list)
    analyzed_at: datetime

    model_config = ConfigDict(frozen=True)
