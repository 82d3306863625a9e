"""Interactive prompts.

The prompts are one way of filling the run options; flags are the other.
Each prompt re-asks until the answer parses, then hands back the same
validated value a flag would have produced.
"""

import click

from voice_admin.exceptions import ConfigurationError
from voice_admin.holidays.models import Jurisdiction, YearWindow
from voice_admin.provisioning.accounts import AccountKind


def _parse_jurisdictions(value: str) -> tuple[Jurisdiction, ...]:
    try:
        parsed = Jurisdiction.parse_many([value])
    except ConfigurationError as e:
        raise click.BadParameter(str(e)) from e
    if not parsed:
        raise click.BadParameter("select at least one jurisdiction")
    return parsed


def prompt_jurisdictions() -> tuple[Jurisdiction, ...]:
    codes = ", ".join(j.value for j in Jurisdiction)
    return click.prompt(
        f"Jurisdictions to process, comma separated ({codes})",
        value_proc=_parse_jurisdictions,
    )


def prompt_window(default: YearWindow, choices: tuple[YearWindow, ...] = tuple(YearWindow)) -> YearWindow:
    answer = click.prompt(
        "Which years",
        type=click.Choice([w.value for w in choices]),
        default=default.value,
    )
    return YearWindow(answer)


def prompt_account_kind() -> AccountKind:
    answer = click.prompt(
        "Account kind",
        type=click.Choice([k.value for k in AccountKind]),
    )
    return AccountKind(answer)


def confirm_dry_run() -> bool:
    return click.confirm("Dry run only (log the changes without making them)?", default=True)


def confirm_apply(summary: str) -> bool:
    return click.confirm(f"{summary} Continue?", default=False)
