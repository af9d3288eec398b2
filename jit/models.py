"""Shared pydantic models: the contract between the Jira client and the renderers."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Sprint(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    state: str  # "active" | "closed" | "future"


class Issue(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str  # RW-1931
    summary: str
    status: str | None = None
    sprints: list[Sprint] = []
    assignee: str | None = None  # display name
    reporter: str | None = None
    priority: str | None = None
    issue_type: str | None = None
    created: str | None = None  # 2023-09-15T14:53:37.123+0000
    updated: str | None = None
    due_date: str | None = None  # 2023-09-30
    description: Any = None  # ADF document, plain string (API v2) or None


class DocNode(BaseModel):
    """One node of an Atlassian Document Format tree.

    Only the parts needed for text extraction are kept; ``attrs``, ``marks`` and
    friends are dropped during validation.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    kind: str | None = Field(default=None, alias="type")  # "doc", "paragraph", "text", ...
    text: str | None = None
    content: list["DocNode"] = []
