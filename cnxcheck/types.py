from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GrammarRule(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    issue_type: str = Field(default="", alias="issueType")


class GrammarMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    offset: int
    length: int
    message: str = ""
    rule: GrammarRule


class CheckResponse(BaseModel):
    matches: list[GrammarMatch] = Field(default_factory=list)


class Issue(BaseModel):
    """One reported grammar issue, written out as a single CSV row."""

    model_config = ConfigDict(frozen=True)

    title: str
    issue_type: str
    message: str
    context: str  # block text with the offending span in [brackets]
    rule_id: str
    file: str
    node_path: str

    def as_row(self) -> list[str]:
        return [
            self.title,
            self.issue_type,
            self.message,
            self.context,
            self.rule_id,
            self.file,
            self.node_path,
        ]
