"""Shared test fixtures."""

import pytest

from jit.models import Issue, Sprint


@pytest.fixture
def adf_description() -> dict:
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [
                    {"type": "text", "text": "Login fails "},
                    {"type": "text", "text": "on Safari", "marks": [{"type": "strong"}]},
                ],
            },
            {
                "type": "bulletList",
                "content": [
                    {
                        "type": "listItem",
                        "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Step one"}]}],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def full_issue(adf_description: dict) -> Issue:
    return Issue(
        key="RW-1931",
        summary="Fix login redirect loop",
        status="In Progress",
        sprints=[Sprint(name="Sprint 41", state="closed"), Sprint(name="Sprint 42", state="active")],
        assignee="Jane Doe",
        reporter="John Smith",
        priority="High",
        issue_type="Bug",
        created="2023-09-15T14:53:37.123+0000",
        updated="2023-09-18T09:01:02.000+0000",
        due_date="2023-09-30",
        description=adf_description,
    )


@pytest.fixture
def bare_issue() -> Issue:
    return Issue(key="RW-1", summary="Bare ticket")
