"""Jira Cloud REST API v3 client."""

import logging

import httpx
from pydantic import ValidationError

from jit.errors import ConfigError, FetchError
from jit.models import Issue, Sprint
from jit.settings import JitSettings

logger = logging.getLogger(__name__)

MY_SPRINT_JQL = "assignee = currentUser() AND sprint in openSprints() ORDER BY updated DESC"

_DETAIL_FIELDS = ("description", "assignee", "reporter", "priority", "issuetype", "created", "updated", "duedate")


def _name(node: dict | None, attr: str = "name") -> str | None:
    return node[attr] if node else None


class JiraClient:
    def __init__(self, settings: JitSettings) -> None:
        if not (settings.base_url and settings.user_email and settings.api_token):
            raise ConfigError("base_url, user_email and api_token are required")
        self._base_url = settings.base_url.rstrip("/")
        self._auth = (settings.user_email, settings.api_token.get_secret_value())
        self._sprint_field = settings.sprint_field
        self._headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = httpx.request(method, url, headers=self._headers, auth=self._auth, timeout=30, **kwargs)
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to send request to Jira API: {exc}") from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)
        if not response.is_success:
            raise FetchError.from_status(response.status_code, response.text)
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Failed to parse Jira API response: {exc}") from exc

    def _get(self, path: str, params: dict | None = None) -> dict:
        return self._request("GET", path, params=params or {})

    def _post(self, path: str, body: dict) -> dict:
        return self._request("POST", path, json=body)

    def _issue_from_node(self, node: dict) -> Issue:
        try:
            fields = node["fields"]
            return Issue(
                key=node["key"],
                summary=fields["summary"],
                status=_name(fields.get("status")),
                sprints=[Sprint.model_validate(s) for s in fields.get(self._sprint_field) or []],
                assignee=_name(fields.get("assignee"), "displayName"),
                reporter=_name(fields.get("reporter"), "displayName"),
                priority=_name(fields.get("priority")),
                issue_type=_name(fields.get("issuetype")),
                created=fields.get("created"),
                updated=fields.get("updated"),
                due_date=fields.get("duedate"),
                description=fields.get("description"),
            )
        except (KeyError, TypeError, ValidationError) as exc:
            raise FetchError(f"Failed to parse Jira API response: unexpected issue shape ({exc})") from exc

    def get_issue(self, key: str) -> Issue:
        fields = ",".join(("summary", "status", self._sprint_field, *_DETAIL_FIELDS))
        node = self._get(f"/rest/api/3/issue/{key}", params={"fields": fields})
        return self._issue_from_node(node)

    def search_my_active_sprint_issues(self, limit: int = 10) -> list[Issue]:
        """Issues assigned to me in open sprints, most recently updated first."""
        data = self._post(
            "/rest/api/3/search/jql",
            {
                "jql": MY_SPRINT_JQL,
                "maxResults": limit,
                "fields": ["summary", "status", self._sprint_field],
            },
        )
        try:
            nodes = data["issues"]
        except (KeyError, TypeError) as exc:
            raise FetchError("Failed to parse Jira API response: no 'issues' in search result") from exc
        return [self._issue_from_node(n) for n in nodes]
