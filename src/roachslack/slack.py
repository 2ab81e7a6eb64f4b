import logging
from dataclasses import dataclass

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from roachslack.errors import ActionError, AuthError, ListError
from roachslack.slack_channels import Channel

logger = logging.getLogger(__name__)

PAGE_SIZE = 200


@dataclass(frozen=True)
class Identity:
    user: str
    team: str
    user_id: str = ""
    team_id: str = ""


def _slack_error(exc):
    # SlackApiError.response is a SlackResponse, which behaves like a dict
    if isinstance(exc, SlackApiError):
        return exc.response.get("error", str(exc))
    return str(exc) or type(exc).__name__


# slack_sdk raises SlackClientError for client side problems and lets urllib's
# URLError (an OSError) through when it can't reach slack at all
SLACK_FAILURES = (SlackClientError, OSError)


class SlackDirectory:
    """
    The handful of slack web api calls roachslack needs, with slack's errors turned into
    ours. Channels are always addressed by id here: conversations.join and friends
    don't accept names.
    """

    def __init__(self, token, client=None):
        if not token:
            raise AuthError("no slack auth key provided")
        self.client = client or WebClient(token=token)

    def authenticate(self):
        try:
            resp = self.client.auth_test()
        except SLACK_FAILURES as exc:
            raise AuthError(f"could not authenticate with slack: {_slack_error(exc)}") from exc
        return Identity(
            user=resp["user"],
            team=resp["team"],
            user_id=resp.get("user_id", ""),
            team_id=resp.get("team_id", ""),
        )

    def list_channels(self, cursor=None):
        """
        Fetch one page of non-archived channels. Returns the page and the cursor for the
        next one, which is None once we've reached the end.
        """
        try:
            resp = self.client.conversations_list(
                cursor=cursor, exclude_archived=True, limit=PAGE_SIZE
            )
        except SLACK_FAILURES as exc:
            raise ListError(f"could not list channels: {_slack_error(exc)}") from exc

        page = [
            Channel.from_api(channel)
            for channel in resp["channels"]
            if not channel.get("is_archived", False)
        ]
        next_cursor = (resp.get("response_metadata") or {}).get("next_cursor") or None
        logger.debug("fetched %d channels, next cursor %r", len(page), next_cursor)
        return page, next_cursor

    def iter_channel_pages(self):
        cursor = None
        while True:
            page, cursor = self.list_channels(cursor)
            yield page
            if not cursor:
                return

    def list_all_channels(self):
        # any failing page raises out of here, so a partial listing is never returned
        return [channel for page in self.iter_channel_pages() for channel in page]

    def join_channel(self, channel_id, name=None):
        self._act("join", name or channel_id, self.client.conversations_join, channel=channel_id)

    def leave_channel(self, channel_id, name=None):
        self._act(
            "leave", name or channel_id, self.client.conversations_leave, channel=channel_id
        )

    def mark_read(self, channel_id, ts, name=None):
        self._act(
            "mark", name or channel_id, self.client.conversations_mark, channel=channel_id, ts=ts
        )

    def _act(self, action, name, call, **kwargs):
        logger.debug("%s %s %r", action, name, kwargs)
        try:
            call(**kwargs)
        except SLACK_FAILURES as exc:
            raise ActionError(action, name, _slack_error(exc)) from exc
