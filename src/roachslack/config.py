import logging
from pathlib import Path

import yaml

from roachslack.errors import ConfigError
from roachslack.slack_channels import CUSTOMER_CHANNEL_PREFIX, DEFAULT_SUPPORT_CHANNELS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("roachslack.yml")
# seconds to give slack to propagate new memberships before marking channels read
SETTLE_DELAY = 5


def load_config(path=None):
    """
    Read the optional yaml config. Looks for roachslack.yml in the working directory
    unless a path is given, in which case the file has to exist.

    default_channels: [customersupport, frame, monitoring, sentry]
    prefix: _
    settle_delay: 5
    """
    settings = {
        "default_channels": DEFAULT_SUPPORT_CHANNELS,
        "prefix": CUSTOMER_CHANNEL_PREFIX,
        "settle_delay": SETTLE_DELAY,
    }

    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            return settings
    path = Path(path)

    try:
        with open(path) as config:
            raw = yaml.load(config, Loader=yaml.SafeLoader) or {}
    except OSError as exc:
        raise ConfigError(f"could not read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"config {path} is not valid yaml: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} should be a mapping")

    unknown = set(raw) - set(settings)
    if unknown:
        raise ConfigError(f"unknown config keys in {path}: {', '.join(sorted(unknown))}")

    if "default_channels" in raw:
        channels = raw["default_channels"]
        if not isinstance(channels, list) or not all(isinstance(c, str) for c in channels):
            raise ConfigError("default_channels should be a list of channel names")
        settings["default_channels"] = frozenset(channels)

    if "prefix" in raw:
        if not isinstance(raw["prefix"], str) or not raw["prefix"]:
            raise ConfigError("prefix should be a non-empty string")
        settings["prefix"] = raw["prefix"]

    if "settle_delay" in raw:
        delay = raw["settle_delay"]
        # bools are ints in python, don't let `settle_delay: yes` through
        if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
            raise ConfigError("settle_delay should be a non-negative number of seconds")
        settings["settle_delay"] = delay

    logger.debug("loaded config from %s: %r", path, settings)
    return settings
