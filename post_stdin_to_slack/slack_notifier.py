"""Slack notification module for posting to an incoming webhook."""

import json
import logging

import requests

from post_stdin_to_slack.config import Config
from post_stdin_to_slack.message import SlackPost


class WebhookPostError(Exception):
    """Raised when the post cannot be serialized or sent."""


class WebhookPoster:
    """Client for posting messages to a Slack incoming webhook."""

    def __init__(self, config: Config, logger: logging.Logger):
        """Initialize the poster.

        Args:
            config: Config with slack_incoming_webhooks_url
            logger: Logger of the current run
        """
        self.logger = logger
        self.webhook_url = config.slack_incoming_webhooks_url

    def serialize(self, slack_post: SlackPost) -> str:
        """Serialize a post to the JSON string sent as the payload field.

        Raises:
            WebhookPostError: If the post cannot be serialized
        """
        self.logger.debug("Generating JSON string is starting.")
        try:
            # ASCII output, so stray surrogates from argv cannot break form encoding
            payload = json.dumps(slack_post.to_dict())
        except (TypeError, ValueError) as e:
            self.logger.error("Generating JSON string is failed.")
            raise WebhookPostError(f"Cannot serialize Slack post: {e}") from e
        self.logger.debug("Generating JSON string has finished.")
        self.logger.debug(payload)
        return payload

    def post(self, slack_post: SlackPost) -> requests.Response:
        """Post a message to the webhook as form data.

        A non-2xx status from Slack is logged but returned normally.

        Args:
            slack_post: Message to post

        Returns:
            The HTTP response

        Raises:
            WebhookPostError: If serialization or the HTTP request fails
        """
        payload = self.serialize(slack_post)

        self.logger.info("Post form data to the following URL.")
        self.logger.info(self.webhook_url)
        try:
            response = requests.post(self.webhook_url, data={"payload": payload})
        except requests.RequestException as e:
            self.logger.error("Posting form data is failed.")
            raise WebhookPostError(f"Error posting to Slack: {e}") from e

        self.logger.info(
            f"HTTP Response Status: {response.status_code} {response.reason}"
        )
        if not 200 <= response.status_code < 300:
            self.logger.warning(
                f"Slack rejected the post with status {response.status_code}: "
                f"{response.text[:200]}"
            )
        return response
