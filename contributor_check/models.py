"""
Data models for the contributor checker.

Contributor records mirror the objects returned by GitHub's
``/repos/{owner}/{repo}/contributors`` endpoint. Only the fields the
checker reports on are kept; they are serialized back under the same
names so cache files read like API responses.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

ANONYMOUS_TYPE = "Anonymous"
BOT_MARKER = "[bot]"
PROFILE_URL_TEMPLATE = "https://github.com/{login}"


class ExistenceResult(Enum):
    """Outcome of probing a contributor's profile."""
    EXISTS = "exists"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RepositoryTarget:
    """An owner/repo pair to check."""
    owner: str
    repo: str

    @classmethod
    def parse(cls, value: str) -> "RepositoryTarget":
        parts = [part.strip() for part in value.strip().split("/")]
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"Invalid repository '{value}', expected owner/repo")
        return cls(owner=parts[0], repo=parts[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class ContributorRecord:
    """One account's (or anonymous author's) contributions to a repository."""
    type: str
    contributions: int = 0
    login: Optional[str] = None
    id: Optional[int] = None
    html_url: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "ContributorRecord":
        """
        Build a record from a contributor object

        Args:
            data: Contributor dictionary as returned by the API or read from cache

        Returns:
            ContributorRecord

        Raises:
            ValueError: If the object is neither a named nor an anonymous contributor
        """
        if not isinstance(data, dict):
            raise ValueError(f"Contributor entry must be an object, got {type(data).__name__}")

        contributor_type = data.get("type") or ""
        contributions = int(data.get("contributions") or 0)

        # Anonymous entries carry name/email only, named ones login/id/url only
        if contributor_type == ANONYMOUS_TYPE:
            record = cls(
                type=contributor_type,
                contributions=contributions,
                name=data.get("name"),
                email=data.get("email"),
            )
        else:
            record = cls(
                type=contributor_type,
                contributions=contributions,
                login=data.get("login"),
                id=data.get("id"),
                html_url=data.get("html_url"),
            )

        if record.contributions < 0:
            raise ValueError(f"Negative contribution count: {record.contributions}")
        if not record.is_anonymous and (not record.login or record.id is None):
            raise ValueError(f"Named contributor is missing login or id: {data}")
        if record.is_anonymous and not (record.name or record.email):
            raise ValueError(f"Anonymous contributor has neither name nor email: {data}")

        return record

    def to_dict(self) -> dict:
        """Serialize using the API's field names, dropping empty fields"""
        if self.is_anonymous:
            data = {
                "type": self.type,
                "name": self.name,
                "email": self.email,
                "contributions": self.contributions,
            }
        else:
            data = {
                "login": self.login,
                "id": self.id,
                "type": self.type,
                "html_url": self.html_url,
                "contributions": self.contributions,
            }
        return {key: value for key, value in data.items() if value is not None}

    @property
    def is_anonymous(self) -> bool:
        return self.type == ANONYMOUS_TYPE

    @property
    def is_bot(self) -> bool:
        return bool(self.login) and BOT_MARKER in self.login

    @property
    def profile_url(self) -> str:
        return self.html_url or PROFILE_URL_TEMPLATE.format(login=self.login)
