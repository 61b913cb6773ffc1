from enum import StrEnum
from logging import getLogger
from typing import Optional, Sequence

import click
from rich.console import Console, Group
from rich.text import Text

from ...constraint import ConstraintKind
from ...history import SequenceHistoryMatcher
from ..exc import PolicyViolationError
from ..options import resolve_rules, rules_option

__all__ = ["check"]


logger = getLogger(__name__)


class RecordStyle(StrEnum):
    INFO = "steel_blue3"
    CRITICAL = "yellow"


@click.command()
@rules_option
@click.option("-u", "--user", help="Username the password may not contain.")
@click.option(
    "-p",
    "--previous",
    multiple=True,
    help="A previous password, newest first. May be repeated.",
)
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    help="The password to check. Prompted for when omitted.",
)
@click.pass_context
def check(
    ctx: click.Context,
    spec: Optional[str],
    user: Optional[str],
    previous: Sequence[str],
    password: str,
) -> None:
    """
    Check a password against the rules.

    Exits with status 64 when the password violates any of the rules.
    """
    rules = resolve_rules(ctx, spec)
    logger.debug("checking password against %r", str(rules))
    matcher = SequenceHistoryMatcher(tuple(previous)) if previous else None

    violations = rules.content_violations(password, user, matcher)
    console = Console(highlight=False)

    if not violations:
        console.print(Text("=> password accepted", style=RecordStyle.INFO))
        return

    console.print(
        Group(
            *(
                Text(
                    "=> violates %s" % kind.format_clause(rules.get(kind)),
                    style=RecordStyle.CRITICAL,
                )
                for kind in ConstraintKind
                if kind in violations
            )
        )
    )
    raise PolicyViolationError(
        "Password violates %d rule(s): %s"
        % (len(violations), ", ".join(k for k in ConstraintKind if k in violations))
    )
