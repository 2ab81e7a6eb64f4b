import pytest

from roachslack.errors import ActionError, ListError
from roachslack.slack import Identity
from roachslack.slack_channels import Channel


class FakeDirectory:
    """Stands in for SlackDirectory, recording every call made against it."""

    def __init__(self, channels=(), fail_on=None, list_error=None):
        self.channels = list(channels)
        # (action, channel name) -> reason
        self.fail_on = fail_on or {}
        self.list_error = list_error
        self.calls = []

    def authenticate(self):
        self.calls.append(("auth",))
        return Identity(user="leo", team="roachers", user_id="U1", team_id="T1")

    def list_all_channels(self):
        self.calls.append(("list",))
        if self.list_error:
            raise ListError(self.list_error)
        return list(self.channels)

    def _maybe_fail(self, action, name):
        if (action, name) in self.fail_on:
            raise ActionError(action, name, self.fail_on[(action, name)])

    def join_channel(self, channel_id, name=None):
        self.calls.append(("join", channel_id))
        self._maybe_fail("join", name)

    def leave_channel(self, channel_id, name=None):
        self.calls.append(("leave", channel_id))
        self._maybe_fail("leave", name)

    def mark_read(self, channel_id, ts, name=None):
        self.calls.append(("mark", channel_id, ts))
        self._maybe_fail("mark", name)

    @property
    def mutating_calls(self):
        return [call for call in self.calls if call[0] in {"join", "leave", "mark"}]


def make_channel(name, is_member=False, is_ext_shared=False, id=None):
    return Channel(
        id=id or f"C-{name}",
        name=name,
        is_member=is_member,
        is_ext_shared=is_ext_shared,
    )


@pytest.fixture
def channel():
    return make_channel


@pytest.fixture
def fake_directory():
    return FakeDirectory
