from pydantic import BaseModel, Field
from typing import List, Optional, Literal


class ImportEdit(BaseModel):
    """
    One rewritten import reference.
    """
    original: str
    replacement: str
    line: int
    statement_index: int  # position among the import statements of the file
    start_byte: int
    end_byte: int

class DocblockEdit(BaseModel):
    """
    Marker lines inserted into the file-level docblock.
    """
    marker_lines: List[int]  # 1-based lines (in the input) carrying the strict marker
    inserted: List[str]

class RewriteResult(BaseModel):
    """
    Output of a single rewrite.

    `changed` is true iff at least one edit rule fired. An unchanged result
    carries the input text verbatim.
    """
    text: str
    import_edits: List[ImportEdit] = Field(default_factory=list)
    docblock_edit: Optional[DocblockEdit] = None
    syntax_errors: int = 0  # recovered errors, only non-zero in tolerant mode

    @property
    def changed(self) -> bool:
        return bool(self.import_edits) or self.docblock_edit is not None

class PackageInfo(BaseModel):
    """
    A package of the source tree, as described by its package.json.
    """
    name: str
    directory: str
    private: bool = False
    export_paths: List[str] = Field(default_factory=list)  # keys of "exports", e.g. ".", "./LexicalComposer"

class FileOutcome(BaseModel):
    """
    What happened to one declaration file during a run.
    """
    source: str
    package: str
    status: Literal["written", "changed", "unchanged", "failed"]
    output: Optional[str] = None
    replacements: int = 0
    docblock_annotated: bool = False
    error: Optional[str] = None

class RewriteReport(BaseModel):
    """
    Summary of a rewrite run across packages.
    """
    packages: int = 0
    files: List[FileOutcome] = Field(default_factory=list)
    duration: float = 0.0
    dry_run: bool = False

    @property
    def failed(self) -> List[FileOutcome]:
        return [f for f in self.files if f.status == "failed"]

    def count(self, status: str) -> int:
        return sum(1 for f in self.files if f.status == status)
