"""Entry point when the package is executed as a module."""

import sys
from dataclasses import dataclass
from pathlib import Path

import click
from pydantic import ValidationError

from voice_admin import prompts
from voice_admin.contacts.importer import import_contacts
from voice_admin.exceptions import ConfigurationError
from voice_admin.holidays.models import Jurisdiction, YearWindow
from voice_admin.holidays.workflow import (
    HolidayCreateOptions,
    HolidaySyncOptions,
    StaticSyncOptions,
    create_holiday_schedules,
    sync_holidays,
    sync_static_holidays,
)
from voice_admin.platform.clients.directory import DirectoryClient
from voice_admin.platform.clients.exceptions import AdminAuthenticationError, AdminClientError
from voice_admin.platform.observability import configure_logging, get_logger, initialize_bugsnag, new_run_id
from voice_admin.platform.session import AdminSession
from voice_admin.platform.settings import DirectorySettings, Settings
from voice_admin.provisioning.accounts import AccountKind, ProvisioningOptions, provision_accounts
from voice_admin.provisioning.csv_input import read_account_rows, read_contact_upns

logger = get_logger(__name__)

# Update mode never reaches past next year
SYNC_WINDOWS = (YearWindow.CURRENT_YEAR, YearWindow.CURRENT_AND_NEXT_YEAR)


@dataclass
class CliState:
    log_level: str | None
    log_json: bool | None
    interactive: bool


def _interactive() -> bool:
    return sys.stdin.isatty()


def _load_settings(state: CliState) -> Settings:
    try:
        settings = Settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration:\n{e}") from e

    level = state.log_level or settings.logging.level
    json_output = settings.logging.json_output if state.log_json is None else state.log_json
    configure_logging(level.upper(), json_output=json_output)
    if settings.bugsnag is not None:
        initialize_bugsnag(settings.bugsnag.api_key, settings.bugsnag.release_stage)
    return settings


def _connect(settings: Settings) -> AdminSession:
    try:
        return AdminSession.connect(settings)
    except AdminAuthenticationError as e:
        logger.error("Could not establish the administrative session, aborting run", error=str(e))
        raise click.ClickException(str(e)) from e


def _jurisdictions(state: CliState, values: tuple[str, ...]) -> tuple[Jurisdiction, ...]:
    if values:
        try:
            parsed = Jurisdiction.parse_many(values)
        except ConfigurationError as e:
            raise click.BadParameter(str(e), param_hint="--jurisdiction") from e
        if parsed:
            return parsed
    if state.interactive:
        return prompts.prompt_jurisdictions()
    raise click.UsageError("at least one --jurisdiction is required")


def _dry_run(state: CliState, value: bool | None) -> bool:
    if value is not None:
        return value
    if state.interactive:
        return prompts.confirm_dry_run()
    return False


def _finish(report_ok: bool) -> None:
    if not report_ok:
        sys.exit(1)


jurisdiction_option = click.option(
    "--jurisdiction",
    "-j",
    "jurisdictions",
    multiple=True,
    help="Jurisdiction code (SA, QLD, ACT, NSW, WA, NT, VIC, TAS); repeat or comma separate.",
)
dry_run_option = click.option(
    "--dry-run/--apply",
    "dry_run",
    default=None,
    help="Log the planned changes without making them.",
)


@click.group()
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.option("--log-json/--log-console", "log_json", default=None, help="Log as JSON or console text.")
@click.pass_context
def main(ctx: click.Context, log_level: str | None, log_json: bool | None):
    """Administrative tooling for the calling platform."""
    configure_logging((log_level or "INFO").upper(), json_output=bool(log_json))
    new_run_id()
    ctx.obj = CliState(log_level=log_level, log_json=log_json, interactive=_interactive())


@main.group()
def holidays():
    """Public-holiday schedules."""


@holidays.command("sync")
@jurisdiction_option
@click.option(
    "--window",
    type=click.Choice([w.value for w in SYNC_WINDOWS]),
    default=None,
    help="Years to fetch (default: current-and-next).",
)
@click.option("--skip-name", "skip_names", multiple=True, help="Holiday name to ignore (default from settings).")
@dry_run_option
@click.pass_obj
def holidays_sync(state: CliState, jurisdictions, window, skip_names, dry_run):
    """Update existing schedules from the open-data feed."""
    selected = _jurisdictions(state, jurisdictions)
    if window is None:
        window_value = (
            prompts.prompt_window(YearWindow.CURRENT_AND_NEXT_YEAR, SYNC_WINDOWS)
            if state.interactive
            else YearWindow.CURRENT_AND_NEXT_YEAR
        )
    else:
        window_value = YearWindow(window)
    dry = _dry_run(state, dry_run)

    settings = _load_settings(state)
    options = HolidaySyncOptions(
        jurisdictions=selected,
        window=window_value,
        dry_run=dry,
        skip_names=tuple(skip_names or settings.open_data.skip_names),
    )
    with _connect(settings) as session:
        try:
            report = sync_holidays(session, options)
        except AdminClientError as e:
            raise click.ClickException(str(e)) from e
    _finish(report.ok)


@holidays.command("create")
@jurisdiction_option
@click.option(
    "--window",
    type=click.Choice([w.value for w in YearWindow]),
    default=YearWindow.ANY.value,
    show_default=True,
    help="Years to fetch.",
)
@click.option(
    "--grouped/--per-holiday",
    default=True,
    show_default=True,
    help="One schedule per jurisdiction or one per holiday name.",
)
@click.option("--skip-name", "skip_names", multiple=True, help="Holiday name to ignore (default from settings).")
@dry_run_option
@click.pass_obj
def holidays_create(state: CliState, jurisdictions, window, grouped, skip_names, dry_run):
    """Create new schedules from the open-data feed."""
    selected = _jurisdictions(state, jurisdictions)
    dry = _dry_run(state, dry_run)

    settings = _load_settings(state)
    options = HolidayCreateOptions(
        jurisdictions=selected,
        window=YearWindow(window),
        grouped=grouped,
        dry_run=dry,
        skip_names=tuple(skip_names or settings.open_data.skip_names),
    )
    with _connect(settings) as session:
        try:
            report = create_holiday_schedules(session, options)
        except AdminClientError as e:
            raise click.ClickException(str(e)) from e
    _finish(report.ok)


@holidays.command("sync-json")
@click.option(
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=True,
    help="Directory holding one <JURISDICTION>.json file per state.",
)
@jurisdiction_option
@dry_run_option
@click.pass_obj
def holidays_sync_json(state: CliState, directory: Path, jurisdictions, dry_run):
    """Update existing schedules from static per-state JSON files."""
    selected = _jurisdictions(state, jurisdictions)
    dry = _dry_run(state, dry_run)

    settings = _load_settings(state)
    options = StaticSyncOptions(directory=directory, jurisdictions=selected, dry_run=dry)
    with _connect(settings) as session:
        try:
            report = sync_static_holidays(session, options)
        except (AdminClientError, ConfigurationError) as e:
            raise click.ClickException(str(e)) from e
    _finish(report.ok)


@main.group()
def accounts():
    """Resource accounts."""


@accounts.command("provision")
@click.option("--csv", "csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), required=True)
@click.option("--kind", type=click.Choice([k.value for k in AccountKind]), default=None)
@click.option("--usage-location", default=None, help="Country code (default from settings).")
@click.option("--license-sku", default=None, help="SKU part number (default from settings).")
@click.option("--replication-delay", type=float, default=None, help="Seconds to wait before licensing.")
@dry_run_option
@click.pass_obj
def accounts_provision(state: CliState, csv_path: Path, kind, usage_location, license_sku, replication_delay, dry_run):
    """Create auto attendant or call queue accounts from a CSV file."""
    if kind is None:
        if not state.interactive:
            raise click.UsageError("--kind is required")
        kind_value = prompts.prompt_account_kind()
    else:
        kind_value = AccountKind(kind)
    dry = _dry_run(state, dry_run)

    settings = _load_settings(state)
    try:
        rows = read_account_rows(csv_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    if not rows:
        logger.warning("No valid rows to provision", file=str(csv_path))
        return

    if not dry and state.interactive and not prompts.confirm_apply(f"About to create {len(rows)} account(s)."):
        raise click.Abort()

    options = ProvisioningOptions(
        kind=kind_value,
        usage_location=(usage_location or settings.provisioning.usage_location).upper(),
        license_sku=license_sku or settings.provisioning.license_sku,
        replication_delay_seconds=(
            settings.provisioning.replication_delay_seconds if replication_delay is None else replication_delay
        ),
        dry_run=dry,
    )
    with _connect(settings) as session:
        report = provision_accounts(session, rows, options)
    _finish(report.ok)


@main.group()
def contacts():
    """Directory contacts."""


@contacts.command("import")
@click.option("--csv", "csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), required=True)
@click.option("--mailbox", required=True, help="Principal name of the mailbox receiving the contacts.")
@dry_run_option
@click.pass_obj
def contacts_import(state: CliState, csv_path: Path, mailbox: str, dry_run):
    """Import directory users listed in a CSV file as mailbox contacts."""
    dry = _dry_run(state, dry_run)
    settings = _load_settings(state)
    try:
        upns = read_contact_upns(csv_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    with _connect(settings) as session:
        report = import_contacts(session, upns, mailbox, dry_run=dry)
    _finish(report.ok)


@main.command("tenant-id")
@click.argument("domain")
def tenant_id(domain: str):
    """Print the tenant ID of a verified domain."""
    with DirectoryClient(DirectorySettings().url) as client:
        try:
            click.echo(client.resolve_tenant_id(domain))
        except AdminClientError as e:
            raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    sys.exit(main())
