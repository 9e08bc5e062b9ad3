"""Base types for chat notification adapters."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ChannelPayload:
    """Represents the HTTP request payload for a notification channel."""
    method: str
    url: str
    headers: dict[str, str]
    body: str  # JSON string


@dataclass(frozen=True)
class NotificationRequest:
    """The validation result to announce, as supplied by the workflow."""
    name: str
    url: str
    validation_id: str
    validation_status: str
    validation_url: str
    validation_details: str


@dataclass(frozen=True)
class RunContext:
    """Metadata about the workflow run that triggered the notification."""
    owner: str
    repo: str
    event_name: str = ""
    ref: str = ""
    actor: str = ""
    sha: str = ""
    workflow: str = ""
    number: Optional[int] = None  # pull request number, if any
