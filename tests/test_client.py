"""Tests for JiraClient using pytest-httpx."""

import base64
import json
import re

import httpx
import pytest
from pytest_httpx import HTTPXMock

from jit.client import MY_SPRINT_JQL, JiraClient
from jit.errors import ConfigError, FetchError
from jit.models import Issue, Sprint
from jit.settings import JitSettings

BASE_URL = "https://acme.atlassian.net"
ISSUE_URL = re.compile(rf"{re.escape(BASE_URL)}/rest/api/3/issue/RW-1931(\?.*)?$")
SEARCH_URL = f"{BASE_URL}/rest/api/3/search/jql"


def _settings(**overrides) -> JitSettings:
    values = {
        "base_url": f"{BASE_URL}/",
        "api_token": "tok_secret",
        "user_email": "me@acme.com",
        **overrides,
    }
    return JitSettings(**values)  # type: ignore[arg-type]


_ISSUE_NODE = {
    "id": "10001",
    "key": "RW-1931",
    "fields": {
        "summary": "Fix login redirect loop",
        "status": {"name": "In Progress", "id": "3"},
        "customfield_10020": [
            {"id": 1, "name": "Sprint 41", "state": "closed", "boardId": 5},
            {"id": 2, "name": "Sprint 42", "state": "active", "boardId": 5},
        ],
        "description": {"type": "doc", "version": 1, "content": []},
        "assignee": {"displayName": "Jane Doe", "accountId": "abc"},
        "reporter": {"displayName": "John Smith"},
        "priority": {"name": "High"},
        "issuetype": {"name": "Bug"},
        "created": "2023-09-15T14:53:37.123+0000",
        "updated": "2023-09-18T09:01:02.000+0000",
        "duedate": None,
    },
}


class TestInit:
    def test_missing_credentials_rejected(self) -> None:
        with pytest.raises(ConfigError):
            JiraClient(JitSettings(base_url=BASE_URL, user_email=None, api_token=None))  # type: ignore[call-arg]


class TestGetIssue:
    def test_returns_issue(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=ISSUE_URL, method="GET", json=_ISSUE_NODE)
        issue = JiraClient(_settings()).get_issue("RW-1931")

        assert isinstance(issue, Issue)
        assert issue.key == "RW-1931"
        assert issue.summary == "Fix login redirect loop"
        assert issue.status == "In Progress"
        assert issue.sprints == [Sprint(name="Sprint 41", state="closed"), Sprint(name="Sprint 42", state="active")]
        assert issue.assignee == "Jane Doe"
        assert issue.reporter == "John Smith"
        assert issue.priority == "High"
        assert issue.issue_type == "Bug"
        assert issue.due_date is None
        assert issue.description == {"type": "doc", "version": 1, "content": []}

    def test_request_shape(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=ISSUE_URL, json=_ISSUE_NODE)
        JiraClient(_settings()).get_issue("RW-1931")

        request = httpx_mock.get_request()
        assert request is not None
        assert request.url.path == "/rest/api/3/issue/RW-1931"
        fields = request.url.params["fields"].split(",")
        assert "customfield_10020" in fields
        assert "duedate" in fields
        expected = base64.b64encode(b"me@acme.com:tok_secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"

    def test_custom_sprint_field(self, httpx_mock: HTTPXMock) -> None:
        node = {"key": "RW-1931", "fields": {"summary": "x", "customfield_99": [{"name": "S", "state": "active"}]}}
        httpx_mock.add_response(url=ISSUE_URL, json=node)
        issue = JiraClient(_settings(sprint_field="customfield_99")).get_issue("RW-1931")
        assert issue.sprints == [Sprint(name="S", state="active")]

    def test_optional_fields_absent(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=ISSUE_URL, json={"key": "RW-1931", "fields": {"summary": "Only summary"}})
        issue = JiraClient(_settings()).get_issue("RW-1931")
        assert issue.status is None
        assert issue.sprints == []
        assert issue.assignee is None

    def test_not_found_raises_with_status_and_body(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=ISSUE_URL, status_code=404, text="Issue does not exist")
        with pytest.raises(FetchError, match="404 - Issue does not exist") as excinfo:
            JiraClient(_settings()).get_issue("RW-1931")
        assert excinfo.value.status_code == 404
        assert excinfo.value.body == "Issue does not exist"

    def test_missing_summary_raises(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=ISSUE_URL, json={"key": "RW-1931", "fields": {}})
        with pytest.raises(FetchError, match="unexpected issue shape"):
            JiraClient(_settings()).get_issue("RW-1931")

    def test_non_json_body_raises(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=ISSUE_URL, text="<html>login</html>")
        with pytest.raises(FetchError, match="Failed to parse"):
            JiraClient(_settings()).get_issue("RW-1931")

    def test_transport_error_raises(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("connection refused"), url=ISSUE_URL)
        with pytest.raises(FetchError, match="connection refused"):
            JiraClient(_settings()).get_issue("RW-1931")


class TestSearchMyActiveSprintIssues:
    def test_returns_list(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=SEARCH_URL, method="POST", json={"issues": [_ISSUE_NODE]})
        issues = JiraClient(_settings()).search_my_active_sprint_issues(5)
        assert [i.key for i in issues] == ["RW-1931"]

    def test_request_body(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=SEARCH_URL, method="POST", json={"issues": []})
        JiraClient(_settings()).search_my_active_sprint_issues(7)

        request = httpx_mock.get_request()
        assert request is not None
        assert json.loads(request.content) == {
            "jql": MY_SPRINT_JQL,
            "maxResults": 7,
            "fields": ["summary", "status", "customfield_10020"],
        }

    def test_empty_list(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=SEARCH_URL, method="POST", json={"issues": []})
        assert JiraClient(_settings()).search_my_active_sprint_issues() == []

    def test_unexpected_shape(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=SEARCH_URL, method="POST", json={"errorMessages": ["bad jql"]})
        with pytest.raises(FetchError, match="no 'issues'"):
            JiraClient(_settings()).search_my_active_sprint_issues()

    def test_unauthorized(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=SEARCH_URL, method="POST", status_code=401, text="Unauthorized")
        with pytest.raises(FetchError) as excinfo:
            JiraClient(_settings()).search_my_active_sprint_issues()
        assert excinfo.value.status_code == 401
