"""Shared test fixtures."""

import pytest

from gchat_notify.channels import NotificationRequest, RunContext

WEBHOOK_URL = "https://chat.googleapis.com/v1/spaces/AAAA/messages?key=k&token=t"

INPUTS = {
    "INPUT_NAME": "Lint",
    "INPUT_URL": WEBHOOK_URL,
    "INPUT_VALIDATIONID": "lint-42",
    "INPUT_VALIDATIONSTATUS": "success",
    "INPUT_VALIDATIONURL": "https://ci.example.com/runs/42",
    "INPUT_VALIDATIONDETAILS": "No issues found.",
}

GITHUB_ENV = {
    "GITHUB_REPOSITORY": "octo-org/widgets",
    "GITHUB_EVENT_NAME": "push",
    "GITHUB_REF": "refs/heads/main",
    "GITHUB_ACTOR": "octocat",
    "GITHUB_SHA": "abc123",
    "GITHUB_WORKFLOW": "CI",
}


@pytest.fixture
def notification_request():
    return NotificationRequest(
        name="Lint",
        url=WEBHOOK_URL,
        validation_id="lint-42",
        validation_status="success",
        validation_url="https://ci.example.com/runs/42",
        validation_details="No issues found.",
    )


@pytest.fixture
def run_context():
    return RunContext(
        owner="octo-org",
        repo="widgets",
        event_name="push",
        ref="refs/heads/main",
        actor="octocat",
        sha="abc123",
        workflow="CI",
    )


@pytest.fixture
def action_env(monkeypatch):
    """Runner environment for a push event with every input supplied."""
    monkeypatch.delenv("GITHUB_EVENT_PATH", raising=False)
    for key, value in {**INPUTS, **GITHUB_ENV}.items():
        monkeypatch.setenv(key, value)
    return monkeypatch


@pytest.fixture
def webhook_url():
    return WEBHOOK_URL
