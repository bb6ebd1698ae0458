from pydantic import BaseModel, ConfigDict, model_validator


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int
    column: int


class TextEdit(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_byte: int
    end_byte: int
    text: str

    @model_validator(mode="after")
    def _check_range(self) -> "TextEdit":
        if self.end_byte < self.start_byte:
            raise ValueError(f"Invalid edit range {self.start_byte}..{self.end_byte}")
        return self


class Fix(BaseModel):
    """Insertion of the alias declaration plus replacement of the literal.

    Both edits are applied together or not at all.
    """

    model_config = ConfigDict(frozen=True)

    insertion: TextEdit
    replacement: TextEdit

    @property
    def edits(self) -> tuple[TextEdit, TextEdit]:
        return (self.insertion, self.replacement)

    @property
    def start_byte(self) -> int:
        return min(edit.start_byte for edit in self.edits)

    @property
    def end_byte(self) -> int:
        return max(edit.end_byte for edit in self.edits)


class Finding(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    message_id: str
    message: str
    start: Position
    end: Position
    start_byte: int
    end_byte: int
    fix: Fix | None = None


class FileReport(BaseModel):
    path: str
    language: str
    findings: list[Finding]
    fixed_source: str | None = None
    passes: int = 0
    applied: int = 0

    @property
    def fixable(self) -> int:
        return sum(1 for finding in self.findings if finding.fix is not None)
