"""Google Chat channel adapter.

Builds a ``cardsV2`` message describing a validation run and wraps it for an
incoming webhook. See
https://developers.google.com/workspace/chat/api/reference/rest/v1/cards
for the card schema.
"""

import json
from typing import Optional

from gchat_notify.channels import ChannelPayload, NotificationRequest, RunContext

STATUS_COLORS = {
    "success": "#2cbe4e",
    "failure": "#ff0000",
    "other": "#ffc107",
}

EVENT_PULL_REQUEST = "pull_request"
EVENT_PUSH = "push"
EVENT_WORKFLOW_DISPATCH = "workflow_dispatch"
EVENT_TYPES = {EVENT_PULL_REQUEST, EVENT_PUSH, EVENT_WORKFLOW_DISPATCH}

EVENT_LABELS = {
    EVENT_PULL_REQUEST: "Pull Request",
    EVENT_PUSH: "Push",
}
DEFAULT_EVENT_LABEL = "Workflow Dispatch"

GITHUB_URL = "https://github.com"
GITHUB_MARK_URL = "https://github.githubassets.com/assets/GitHub-Mark-ea2971cee799.png"
ASSETS_URL = "https://raw.githubusercontent.com/ciro-maciel/google-chat-github-action/main/assets"

# Google Chat truncates long header titles
NAME_WIDGET_MIN_LENGTH = 45

CODE_STANDARDIZATION_TEXT = "is coming...🫥🤓"


def asset_url(filename: str) -> str:
    return f"{ASSETS_URL}/{filename}"


def resolve_status(validation_status: str) -> tuple[str, str, str]:
    """
    Map a raw validation status onto the card's presentation.

    Returns:
        ``(status_type, color, label)``. Anything other than success or
        failure is shown as cancelled, whatever the raw value was.
    """
    status_type = validation_status.lower()
    if status_type == "success":
        color = STATUS_COLORS["success"]
    elif status_type == "failure":
        color = STATUS_COLORS["failure"]
    else:
        return "cancelled", STATUS_COLORS["other"], "Cancelled"
    label = validation_status[:1].upper() + validation_status[1:]
    return status_type, color, label


def resolve_event(event_name: Optional[str]) -> tuple[str, str]:
    """Return ``(event_type, label)``; unknown events are treated as a push."""
    event_type = (event_name or "").lower()
    if event_type not in EVENT_TYPES:
        event_type = EVENT_PUSH
    return event_type, EVENT_LABELS.get(event_type, DEFAULT_EVENT_LABEL)


def event_url(ctx: RunContext, event_type: str) -> str:
    repo_url = f"{GITHUB_URL}/{ctx.owner}/{ctx.repo}"
    if event_type == EVENT_PULL_REQUEST:
        number = "" if ctx.number is None else ctx.number
        return f"{repo_url}/pull/{number}"
    return f"{repo_url}/commit/{ctx.sha}"


def _open_link(text: str, url: str) -> dict:
    return {"text": text, "onClick": {"openLink": {"url": url}}}


def _decorated_text(
    top_label: str,
    text: str,
    icon: str,
    button: Optional[dict] = None,
) -> dict:
    widget = {
        "icon": {"iconUrl": asset_url(icon)},
        "topLabel": top_label,
        "text": text,
    }
    if button:
        widget["button"] = button
    return {"decoratedText": widget}


def build_card(request: NotificationRequest, ctx: RunContext) -> dict:
    """
    Build the card contents (header and sections) for a validation run.

    The result depends only on ``request`` and ``ctx``.
    """
    status_type, status_color, status_label = resolve_status(request.validation_status)
    event_type, event_label = resolve_event(ctx.event_name)

    url = event_url(ctx, event_type)
    checks_url = f"{url}/checks"

    run_widgets = [
        _decorated_text(
            "Status",
            f'<font color="{status_color}">{status_label}</font>',
            icon=f"status_{status_type}.png",
            button=_open_link("Open Job", checks_url),
        ),
        _decorated_text(
            "Event",
            event_label,
            icon=f"event_{event_type}.png",
            button=_open_link("Open Event", url),
        ),
        _decorated_text("Ref", ctx.ref, icon="ref.png"),
        _decorated_text("Actor", ctx.actor, icon="actor.png"),
    ]
    if len(request.name) >= NAME_WIDGET_MIN_LENGTH:
        run_widgets.append({
            "decoratedText": {
                "topLabel": "Name",
                "text": request.name,
                "wrapText": True,
            }
        })

    return {
        "header": {
            "title": request.name,
            "subtitle": f"{ctx.owner}/{ctx.repo}",
            "imageUrl": GITHUB_MARK_URL,
            "imageType": "CIRCLE",
        },
        "sections": [
            {"widgets": run_widgets},
            {
                "header": "Code Standardization",
                "collapsible": False,
                "widgets": [
                    {"textParagraph": {"text": CODE_STANDARDIZATION_TEXT}},
                ],
            },
            {
                "header": "Summary",
                "collapsible": True,
                "widgets": [
                    _decorated_text(
                        "Name",
                        request.validation_id,
                        icon="summary.png",
                        button=_open_link("Open Details", request.validation_url),
                    ),
                    {"textParagraph": {"text": request.validation_details}},
                ],
            },
        ],
    }


def build_message(name: str, card: dict) -> dict:
    """Wrap card contents in the webhook message envelope."""
    return {
        "text": "",
        "cardsV2": [
            {"cardId": name, "card": {"name": name, **card}},
        ],
    }


def format_google_chat(name: str, url: str, card: dict) -> ChannelPayload:
    """
    Format a card for a Google Chat incoming webhook.

    Args:
        name: Used as both the card id and the card name
        url: Incoming webhook URL (carries the space key and token)
        card: Output of :func:`build_card`
    """
    return ChannelPayload(
        method="POST",
        url=url,
        headers={"Content-Type": "application/json; charset=UTF-8"},
        body=json.dumps(build_message(name, card)),
    )
