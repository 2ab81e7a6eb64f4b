from dataclasses import dataclass, field
from enum import Enum

CUSTOMER_CHANNEL_PREFIX = "_"
DEFAULT_SUPPORT_CHANNELS = frozenset({"customersupport", "frame", "monitoring", "sentry"})


class RunMode(Enum):
    JOIN = "join"
    LEAVE = "leave"


@dataclass(frozen=True)
class Channel:
    id: str
    name: str
    is_member: bool = False
    is_ext_shared: bool = False
    is_archived: bool = False

    @classmethod
    def from_api(cls, channel):
        # slack leaves flags out entirely for some conversation types
        return cls(
            id=channel["id"],
            name=channel["name"],
            is_member=channel.get("is_member", False),
            is_ext_shared=channel.get("is_ext_shared", False),
            is_archived=channel.get("is_archived", False),
        )


@dataclass(frozen=True)
class SelectionResult:
    ordered_names: tuple = ()
    id_by_name: dict = field(default_factory=dict)
    unreachable: tuple = ()


def select_channels(
    channels,
    mode,
    default_channels=DEFAULT_SUPPORT_CHANNELS,
    prefix=CUSTOMER_CHANNEL_PREFIX,
):
    """
    Pick the support channels to act on.

    Joining takes every customer channel (name starts with `prefix`) plus the default
    support channels, skipping any we're already in. Leaving only ever touches customer
    channels we're in; externally shared ones can't be left through the api so they're
    returned in `unreachable` for the user to leave by hand.
    """
    id_by_name = {}
    unreachable = set()

    for channel in channels:
        is_customer_channel = channel.name.startswith(prefix)

        if mode is RunMode.JOIN:
            if channel.is_member:
                continue
            if is_customer_channel or channel.name in default_channels:
                id_by_name[channel.name] = channel.id

        elif mode is RunMode.LEAVE:
            if not channel.is_member or not is_customer_channel:
                continue
            if channel.is_ext_shared:
                unreachable.add(channel.name)
            else:
                id_by_name[channel.name] = channel.id

    # a name can't be both leavable and not, if slack ever returns it twice the
    # shared copy wins
    for name in unreachable:
        id_by_name.pop(name, None)

    return SelectionResult(
        ordered_names=tuple(sorted(id_by_name)),
        id_by_name=id_by_name,
        unreachable=tuple(sorted(unreachable)),
    )
