from datetime import datetime, timedelta
from logging import getLogger
from typing import Optional

import click
import humanize

from ..exc import PolicyViolationError
from ..options import parse_rules, resolve_rules, rules_option

__all__ = ["format_rules", "expired"]


logger = getLogger(__name__)


@click.command("format")
@click.argument("spec")
@click.option(
    "--fields/--no-fields",
    default=False,
    help="Print the rules as named fields (JSON) instead of a specification.",
)
def format_rules(spec: str, fields: bool) -> None:
    """Print the canonical form of a rule specification."""
    rules = parse_rules(spec)

    if fields:
        click.echo(rules.to_fields().model_dump_json(by_alias=True, indent=2))
    else:
        click.echo(rules.to_string())


@click.command()
@rules_option
@click.option(
    "-l",
    "--last-changed",
    type=click.DateTime(),
    required=True,
    help="When the password was last changed.",
)
@click.pass_context
def expired(ctx: click.Context, spec: Optional[str], last_changed: datetime) -> None:
    """
    Check whether a password is too old.

    Exits with status 64 when the password has expired.
    """
    rules = resolve_rules(ctx, spec)
    now = datetime.now()
    logger.debug("password last changed at %s", last_changed.isoformat())
    age = humanize.naturaldelta(now - last_changed)

    if not rules.expire_passwords:
        click.echo("password age is not limited (last changed %s ago)" % age)
        return

    limit = humanize.naturaldelta(
        timedelta(days=min(rules.max_age, timedelta.max.days))
    )
    if rules.too_old(last_changed, now):
        raise PolicyViolationError(
            "Password expired: last changed %s ago, the limit is %s" % (age, limit)
        )

    click.echo("password is valid (last changed %s ago, limit is %s)" % (age, limit))
