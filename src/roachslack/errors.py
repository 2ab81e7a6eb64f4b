class RoachSlackError(Exception):
    pass


class ConfigError(RoachSlackError):
    pass


class AuthError(RoachSlackError):
    pass


class ListError(RoachSlackError):
    pass


class ActionError(RoachSlackError):
    """
    A single join, leave or mark-read call was rejected by slack.

    `action` is the verb ("join", "leave", "mark"), `channel` the channel name it was
    issued against.
    """

    def __init__(self, action, channel, reason):
        super().__init__(f"could not {action} {channel}: {reason}")
        self.action = action
        self.channel = channel
        self.reason = reason
