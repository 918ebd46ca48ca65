"""Data models for commit-helper."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

SHORT_DESCRIPTION_LIMIT = 80
LONG_DESCRIPTION_LIMIT = 300
FORBIDDEN_CHARACTERS = ("`", '"')


class ActionTag(str, Enum):
    """Commit action tags, each with the guideline shown to the user."""

    FIX = "FIX"
    REF = "REF"
    ADD = "ADD"
    REM = "REM"
    REV = "REV"
    MOV = "MOV"
    REL = "REL"
    IMP = "IMP"
    MERGE = "MERGE"
    CLA = "CLA"
    I18N = "I18N"
    PERF = "PERF"

    @property
    def description(self) -> str:
        return _ACTION_DESCRIPTIONS[self]


_ACTION_DESCRIPTIONS = {
    ActionTag.FIX: "For bug fixes: mostly used in stable versions but also valid if fixing a recent bug in the development version.",
    ActionTag.REF: "For refactoring: when a feature is heavily rewritten.",
    ActionTag.ADD: "For adding new modules or features.",
    ActionTag.REM: "For removing resources: removing dead code, views, modules, etc.",
    ActionTag.REV: "For reverting commits: if a commit causes issues or is unwanted, it is reverted using this tag.",
    ActionTag.MOV: "For moving files: use git move and do not change the content of the moved file, otherwise Git may lose track of the file's history.",
    ActionTag.REL: "For release commits: new major or minor stable versions.",
    ActionTag.IMP: "For improvements: most changes in the development version are incremental improvements not related to another tag.",
    ActionTag.MERGE: "For merge commits: used in forward port of bug fixes or as the main commit for a feature involving several separated commits.",
    ActionTag.CLA: "For signing the Odoo Individual Contributor License.",
    ActionTag.I18N: "For changes in translation files.",
    ActionTag.PERF: "For performance patches.",
}


class DispatchMode(str, Enum):
    """How a composed commit is handed over."""

    TERMINAL = "terminal"
    EXECUTE = "execute"


class RepositoryEntry(BaseModel):
    """A git repository found while scanning a workspace."""

    model_config = ConfigDict(frozen=True)

    display_label: str = Field(description="Repository name and current branch")
    path: Path = Field(description="Absolute path to the repository working tree")


def _check_forbidden(value: str) -> str:
    if any(char in value for char in FORBIDDEN_CHARACTERS):
        raise ValueError("must not contain backticks (`) or double quotes (\")")
    return value


class CommitDraft(BaseModel):
    """A complete, validated commit message draft."""

    model_config = ConfigDict(frozen=True)

    action: ActionTag
    module: str = Field(min_length=1)
    short_description: str = Field(min_length=1, max_length=SHORT_DESCRIPTION_LIMIT)
    long_description: str = Field(default="", max_length=LONG_DESCRIPTION_LIMIT)

    @field_validator("module", "short_description", "long_description")
    @classmethod
    def _no_quotes(cls, value: str) -> str:
        return _check_forbidden(value)


class DispatchResult(BaseModel):
    """Outcome of handing a composed message to the terminal or to git."""

    message: str = Field(description="The composed commit message")
    command: str = Field(description="Equivalent shell command")
    repository: Path | None = Field(default=None, description="Repository the commit belongs to")
    commit_hash: str | None = Field(default=None, description="Short hash when the commit was executed")
