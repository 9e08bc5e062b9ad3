"""Configuration read from the GitHub Actions runner environment."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from gchat_notify.channels import NotificationRequest, RunContext
from gchat_notify.errors import MissingConfigurationError

logger = logging.getLogger(__name__)

# Action input name -> NotificationRequest field, in the order they are checked
REQUIRED_INPUTS = {
    "name": "name",
    "url": "url",
    "validationId": "validation_id",
    "validationStatus": "validation_status",
    "validationUrl": "validation_url",
    "validationDetails": "validation_details",
}


def input_env_name(name: str) -> str:
    """Environment variable the runner uses to pass an action input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


class Settings(BaseSettings):
    request_timeout: Optional[float] = None
    debug: bool = Field(
        False, validation_alias=AliasChoices("GCHAT_NOTIFY_DEBUG", "RUNNER_DEBUG")
    )

    model_config = {"env_prefix": "GCHAT_NOTIFY_", "extra": "ignore"}


class ActionInputs(BaseSettings):
    """The six mandatory action inputs."""

    name: str = Field(validation_alias=input_env_name("name"))
    url: str = Field(validation_alias=input_env_name("url"))
    validation_id: str = Field(validation_alias=input_env_name("validationId"))
    validation_status: str = Field(validation_alias=input_env_name("validationStatus"))
    validation_url: str = Field(validation_alias=input_env_name("validationUrl"))
    validation_details: str = Field(validation_alias=input_env_name("validationDetails"))

    model_config = {"case_sensitive": True, "extra": "ignore"}

    @field_validator(*REQUIRED_INPUTS.values(), mode="before")
    @classmethod
    def _require_value(cls, value):
        if isinstance(value, str):
            value = value.strip()
        if not value:
            raise ValueError("Input required and not supplied")
        return value

    def to_request(self) -> NotificationRequest:
        return NotificationRequest(**self.model_dump())


# Error locations may be reported by alias or by field name
_INPUT_BY_LOC = {}
for _input, _field in REQUIRED_INPUTS.items():
    _INPUT_BY_LOC[_field] = _input
    _INPUT_BY_LOC[input_env_name(_input)] = _input


def load_request() -> NotificationRequest:
    """
    Read the action inputs.

    Raises:
        MissingConfigurationError: naming the first input that is missing or blank
    """
    try:
        inputs = ActionInputs()
    except ValidationError as e:
        loc = e.errors()[0]["loc"]
        missing = _INPUT_BY_LOC.get(str(loc[0]), str(loc[0])) if loc else "unknown"
        raise MissingConfigurationError(
            f"Input required and not supplied: {missing}"
        ) from e
    return inputs.to_request()


class GitHubContext(BaseSettings):
    """Default environment variables set by the runner for every step."""

    repository: str = Field("", validation_alias="GITHUB_REPOSITORY")
    event_name: str = Field("", validation_alias="GITHUB_EVENT_NAME")
    event_path: str = Field("", validation_alias="GITHUB_EVENT_PATH")
    ref: str = Field("", validation_alias="GITHUB_REF")
    actor: str = Field("", validation_alias="GITHUB_ACTOR")
    sha: str = Field("", validation_alias="GITHUB_SHA")
    workflow: str = Field("", validation_alias="GITHUB_WORKFLOW")

    model_config = {"case_sensitive": True, "extra": "ignore"}

    def load_event_payload(self) -> dict:
        """Webhook payload of the triggering event, or {} when unavailable."""
        if not self.event_path:
            return {}
        path = Path(self.event_path)
        if not path.exists():
            logger.debug(f"GITHUB_EVENT_PATH {path} does not exist")
            return {}
        return json.loads(path.read_text(encoding="utf-8"))

    def owner_and_repo(self, payload: dict) -> tuple[str, str]:
        if self.repository:
            owner, _, repo = self.repository.partition("/")
            return owner, repo
        repository = payload.get("repository") or {}
        if repository:
            return repository["owner"]["login"], repository["name"]
        raise MissingConfigurationError(
            "context.repo requires a GITHUB_REPOSITORY environment variable like 'owner/repo'"
        )

    def to_run_context(self) -> RunContext:
        payload = self.load_event_payload()
        owner, repo = self.owner_and_repo(payload)
        return RunContext(
            owner=owner,
            repo=repo,
            event_name=self.event_name,
            ref=self.ref,
            actor=self.actor,
            sha=self.sha,
            workflow=self.workflow,
            number=_issue_number(payload),
        )


def _issue_number(payload: dict) -> Optional[int]:
    source = payload.get("issue") or payload.get("pull_request") or payload
    number = source.get("number")
    return number if isinstance(number, int) else None


def load_run_context() -> RunContext:
    return GitHubContext().to_run_context()


settings = Settings()
