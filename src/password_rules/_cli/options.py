import logging
from typing import Optional

import click

from ..exc import SpecificationSyntaxError
from ..rules import RuleSet
from .exc import SpecificationInputError

__all__ = ("rules_option", "resolve_rules")

logger = logging.getLogger(__name__)

rules_option = click.option(
    "-r",
    "--rules",
    "spec",
    metavar="SPEC",
    help=(
        "Rule specification, e.g. 'length>=12 digit>=1 !user'. Defaults to the "
        "rules from the configuration."
    ),
)


def parse_rules(spec: Optional[str]) -> RuleSet:
    try:
        return RuleSet.from_spec(spec)
    except SpecificationSyntaxError as ex:
        raise SpecificationInputError(
            "Invalid rule specification at offset %d: %s" % (ex.ctx["offset"], ex)
        ) from ex


def resolve_rules(ctx: click.Context, spec: Optional[str]) -> RuleSet:
    if spec is not None:
        return parse_rules(spec)

    logger.debug("no rules given on the command line, using configuration")
    return ctx.obj.rule_set()
