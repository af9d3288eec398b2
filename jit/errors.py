"""Errors reported by the jit CLI. Every one of them ends the current command."""


class JitError(RuntimeError):
    """Base class for failures the CLI prints and exits on."""


class ConfigError(JitError):
    pass


class ResolutionError(JitError):
    """A ticket reference could not be mapped to an issue key."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Could not extract ticket ID from URL: {raw}")


class FetchError(JitError):
    """The Jira API call failed or returned something we can't read."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def from_status(cls, status_code: int, body: str) -> "FetchError":
        return cls(
            f"Jira API request failed with status: {status_code} - {body}",
            status_code=status_code,
            body=body,
        )


class RenderError(JitError):
    pass
