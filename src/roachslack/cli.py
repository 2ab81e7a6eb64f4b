import functools
import logging

import click

from roachslack.config import load_config
from roachslack.errors import RoachSlackError
from roachslack.slack import SlackDirectory
from roachslack.slack_channels import RunMode
from roachslack.support import RunConfig, SupportRunner

KEY_HELP = "Slack API key: see https://api.slack.com/custom-integrations/legacy-tokens"
DRY_HELP = "Perform a dry run only, don't change any settings"
CONFIG_HELP = "YAML file overriding the default channels, prefix and settle delay"


def support_options(f):
    """
    The group's options can be repeated after the subcommand, so both
    `roachslack -k KEY joinSupport` and `roachslack joinSupport -k KEY --dry=true` work.
    """

    @click.option("--key", "-k", default=None, help=KEY_HELP)
    # --dry on its own means true, --dry=false is allowed too
    @click.option(
        "--dry", "-d", type=bool, is_flag=False, flag_value=True, default=None, help=DRY_HELP
    )
    @click.option(
        "--config", "-c", "config_path", type=click.Path(dir_okay=False), help=CONFIG_HELP
    )
    @click.option("--verbose", "-v", is_flag=True, default=False)
    @click.pass_obj
    @functools.wraps(f)
    def wrapper(options, key, dry, config_path, verbose):
        key = key or options["key"]
        dry = options["dry"] if dry is None else dry
        config_path = config_path or options["config_path"]
        if verbose or options["verbose"]:
            logging.basicConfig(level=logging.DEBUG)

        try:
            settings = load_config(config_path)
            run_config = RunConfig(dry_run=dry, **settings)
            report = f(SupportRunner(SlackDirectory(key), run_config))
        except RoachSlackError as exc:
            raise click.ClickException(str(exc)) from exc
        if not report.ok:
            raise click.ClickException(str(report.failure.error))

    return wrapper


@click.group()
@click.option("--key", "-k", envvar="SLACK_KEY", default="", show_envvar=True, help=KEY_HELP)
@click.option("--dry", "-d", is_flag=True, default=False, help=DRY_HELP)
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False), help=CONFIG_HELP)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.pass_context
def cli(ctx, key, dry, config_path, verbose):
    """
    roachslack is a tool for joining and leaving support channels via the command line

    \b
    Examples:
        roachslack joinSupport --key="YOUR SLACK AUTH TOKEN"
        roachslack leaveSupport --key="YOUR SLACK AUTH TOKEN" --dry=true
    """
    ctx.obj = {"key": key, "dry": dry, "config_path": config_path, "verbose": verbose}


@cli.command("joinSupport")
@support_options
def join_support(runner):
    """join all support channels"""
    return runner.run(RunMode.JOIN)


@cli.command("leaveSupport")
@support_options
def leave_support(runner):
    """leave all customer support channels (not the main support ones)"""
    return runner.run(RunMode.LEAVE)


if __name__ == "__main__":
    cli()
