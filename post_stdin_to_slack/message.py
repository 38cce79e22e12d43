"""Build the Slack message posted through the incoming webhook."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from post_stdin_to_slack.config import Config

DEFAULT_POST_TYPE = "Info"
POST_TYPES = ("Info", "Success", "Warning", "Error")
POST_COLORS = {
    "Info": "#1971FF",
    "Success": "#00B06B",
    "Warning": "#F6AA00",
    "Error": "#FF4B00",
}


@dataclass
class SlackPostAttachmentField:
    """A titled field inside an attachment."""

    title: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "value": self.value}


@dataclass
class SlackPostAttachment:
    """A colored attachment holding the message fields."""

    color: str
    fields: List[SlackPostAttachmentField]
    mrkdwn_in: List[str] = field(default_factory=lambda: ["fields"])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color": self.color,
            "mrkdwn_in": list(self.mrkdwn_in),
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass
class SlackPost:
    """A message destined for the configured channel.

    Attributes:
        username: Bot display name
        icon_emoji: Bot icon in emoji-code form
        channel: Target channel
        attachments: Attachments rendered below the message
        mrkdwn: Whether Slack renders markdown, always True
    """

    username: str
    icon_emoji: str
    channel: str
    attachments: List[SlackPostAttachment]
    mrkdwn: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Return the webhook payload as a JSON-ready dictionary."""
        return {
            "username": self.username,
            "icon_emoji": self.icon_emoji,
            "channel": self.channel,
            "mrkdwn": self.mrkdwn,
            "attachments": [a.to_dict() for a in self.attachments],
        }


def color_for(post_type: str) -> str:
    """Return the display color of a post type, Info's color if unknown."""
    return POST_COLORS.get(post_type, POST_COLORS[DEFAULT_POST_TYPE])


def build_post(config: Config, message: str, post_type: str, text: str) -> SlackPost:
    """Assemble the Slack post for captured input.

    Args:
        config: Configuration supplying bot name, icon and channel
        message: Free text shown in the field title
        post_type: Post type keyword, selects the color
        text: Captured standard input, shown in a code block

    Returns:
        The SlackPost with one attachment holding one field
    """
    attachment_field = SlackPostAttachmentField(
        title=f"[{post_type}] {message}",
        value=f"```{text}```",
    )
    attachment = SlackPostAttachment(
        color=color_for(post_type),
        fields=[attachment_field],
    )
    return SlackPost(
        username=config.slack_bot_name,
        icon_emoji=config.slack_bot_icon,
        channel=config.slack_channel,
        attachments=[attachment],
    )
