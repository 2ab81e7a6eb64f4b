import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from roachslack.config import SETTLE_DELAY
from roachslack.errors import ActionError
from roachslack.slack_channels import (
    CUSTOMER_CHANNEL_PREFIX,
    DEFAULT_SUPPORT_CHANNELS,
    RunMode,
    SelectionResult,
    select_channels,
)

logger = logging.getLogger(__name__)

SEPARATOR = "\n--------------------"


@dataclass(frozen=True)
class RunConfig:
    dry_run: bool = False
    default_channels: frozenset = DEFAULT_SUPPORT_CHANNELS
    prefix: str = CUSTOMER_CHANNEL_PREFIX
    settle_delay: float = SETTLE_DELAY


@dataclass(frozen=True)
class ExecutionOutcome:
    name: str
    succeeded: bool
    error: Optional[ActionError] = None


@dataclass
class RunReport:
    mode: RunMode
    selection: SelectionResult
    dry_run: bool = False
    outcomes: list = field(default_factory=list)
    failure: Optional[ExecutionOutcome] = None

    @property
    def ok(self):
        return self.failure is None


class SupportRunner:
    """
    Joins or leaves the support channels for whoever owns the directory's credentials.

    Every directory call happens one at a time, in sorted channel order, and the run stops
    at the first one slack rejects. Anything already joined or left stays that way.
    """

    def __init__(self, directory, config, sleep=time.sleep, clock=time.time):
        self.directory = directory
        self.config = config
        self.sleep = sleep
        self.clock = clock

    def run(self, mode):
        identity = self.directory.authenticate()
        print(f"Logged in as: {identity.user}\n\tTeam: {identity.team}")

        channels = self.directory.list_all_channels()
        logger.debug("%d channels listed", len(channels))
        selection = select_channels(
            channels,
            mode,
            default_channels=self.config.default_channels,
            prefix=self.config.prefix,
        )
        report = RunReport(mode=mode, selection=selection, dry_run=self.config.dry_run)

        if mode is RunMode.JOIN:
            self.join(report)
        else:
            self.leave(report)
        return report

    def join(self, report):
        selection = report.selection
        print(SEPARATOR)
        if not selection.ordered_names:
            print("There are no support channels left for you to join.")
            return

        print("You will be joining the following channels:")
        for name in selection.ordered_names:
            print(name)

        if report.dry_run:
            print(SEPARATOR)
            print("Dry run only, no joins were performed.")
            return

        for name in selection.ordered_names:
            outcome = self._attempt(
                name, self.directory.join_channel, selection.id_by_name[name], name=name
            )
            if not self._record(report, outcome, f"Joined {name}"):
                return

        print(SEPARATOR)
        print("Marking all the joined channels as read.")
        self.sleep(self.config.settle_delay)
        ts = str(int(self.clock()))
        print(ts)
        for name in selection.ordered_names:
            outcome = self._attempt(
                name, self.directory.mark_read, selection.id_by_name[name], ts, name=name
            )
            if not self._record(report, outcome, f"{name} is marked as read."):
                return

        print(SEPARATOR)
        print("Done!\n")

    def leave(self, report):
        selection = report.selection
        print(SEPARATOR)
        if not selection.ordered_names:
            print("There are no support channels left for you to leave.")
            # shared channels still need leaving even if there's nothing we can do
            if selection.unreachable:
                self._print_unreachable(selection)
            return

        print("You will be leaving the following channels:")
        for name in selection.ordered_names:
            print(name)

        if report.dry_run:
            print(SEPARATOR)
            self._print_unreachable(selection)
            print("\nDry run only, no exits were performed.")
            return

        print(SEPARATOR)
        for name in selection.ordered_names:
            outcome = self._attempt(
                name, self.directory.leave_channel, selection.id_by_name[name], name=name
            )
            if not self._record(report, outcome, f"Left {name}"):
                return

        print(SEPARATOR)
        self._print_unreachable(selection)

        print(SEPARATOR)
        print("Done!\n")

    def _attempt(self, label, call, *args, **kwargs):
        try:
            call(*args, **kwargs)
        except ActionError as exc:
            return ExecutionOutcome(name=label, succeeded=False, error=exc)
        return ExecutionOutcome(name=label, succeeded=True)

    def _record(self, report, outcome, message):
        report.outcomes.append(outcome)
        if not outcome.succeeded:
            report.failure = outcome
            print(f"Failed on {outcome.name}: {outcome.error.reason}")
            return False
        print(message)
        return True

    def _print_unreachable(self, selection):
        print("The following shared channels must be left manually:")
        for name in selection.unreachable:
            print(name)
