"""Resource-account provisioning.

Creates application-backed resource accounts, waits for directory
replication, then sets each account's usage location and assigns the
licence SKU.
"""

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from voice_admin.platform.clients.calling import ResourceAccount
from voice_admin.platform.clients.exceptions import AdminClientError, AdminConflictError
from voice_admin.platform.observability import get_logger
from voice_admin.platform.session import AdminSession
from voice_admin.provisioning.csv_input import AccountRow

logger = get_logger(__name__)

AUTO_ATTENDANT_APPLICATION_ID = "ce933385-9390-45d1-9512-c8d228074e07"
CALL_QUEUE_APPLICATION_ID = "11cd3e2e-fccb-42ad-ad00-878b93575e07"


class AccountKind(StrEnum):
    """Kind of automated calling entity an account represents."""

    AUTO_ATTENDANT = "auto-attendant"
    CALL_QUEUE = "call-queue"

    @property
    def application_id(self) -> str:
        if self is AccountKind.AUTO_ATTENDANT:
            return AUTO_ATTENDANT_APPLICATION_ID
        return CALL_QUEUE_APPLICATION_ID


@dataclass(frozen=True)
class ProvisioningOptions:
    """Options for one provisioning run.

    Attributes:
        kind: Account kind, which selects the application ID.
        usage_location: Two-letter country code required before licensing.
        license_sku: SKU part number to assign.
        replication_delay_seconds: Wait between creation and licensing.
        dry_run: Log the planned calls without making them.
    """

    kind: AccountKind
    usage_location: str = "AU"
    license_sku: str = "PHONESYSTEM_VIRTUALUSER"
    replication_delay_seconds: float = 60.0
    dry_run: bool = False


@dataclass
class ProvisioningReport:
    created: list[str] = field(default_factory=list)
    licensed: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed


def provision_accounts(
    session: AdminSession,
    rows: Iterable[AccountRow],
    options: ProvisioningOptions,
    sleep: Callable[[float], None] = time.sleep,
) -> ProvisioningReport:
    """Create resource accounts and license them.

    A failed or conflicting account is logged and skipped; the batch
    continues. Accounts created earlier in the run are never rolled back.
    """
    report = ProvisioningReport(dry_run=options.dry_run)
    created: list[ResourceAccount] = []

    for row in rows:
        if options.dry_run:
            logger.info(
                "Dry run: would create resource account",
                upn=row.user_principal_name,
                display_name=row.display_name,
                kind=options.kind.value,
                usage_location=options.usage_location,
                license_sku=options.license_sku,
            )
            report.created.append(row.user_principal_name)
            continue

        try:
            account = session.calling.create_resource_account(
                row.user_principal_name,
                row.display_name,
                options.kind.application_id,
            )
        except AdminConflictError as e:
            logger.warning("Resource account already exists", upn=row.user_principal_name, error=str(e))
            report.conflicts.append(row.user_principal_name)
            continue
        except AdminClientError as e:
            logger.error("Resource account creation failed", upn=row.user_principal_name, error=str(e))
            report.failed.append(row.user_principal_name)
            continue

        logger.info("Created resource account", upn=account.user_principal_name, object_id=account.object_id)
        report.created.append(account.user_principal_name)
        created.append(account)

    if created:
        _license_accounts(session, created, options, report, sleep)
    return report


def _license_accounts(
    session: AdminSession,
    accounts: list[ResourceAccount],
    options: ProvisioningOptions,
    report: ProvisioningReport,
    sleep: Callable[[float], None],
) -> None:
    logger.info("Waiting for directory replication", seconds=options.replication_delay_seconds, accounts=len(accounts))
    sleep(options.replication_delay_seconds)

    try:
        sku_id = session.directory.find_sku_id(options.license_sku)
    except AdminClientError as e:
        logger.error("Licence SKU lookup failed", license_sku=options.license_sku, error=str(e))
        report.failed.extend(a.user_principal_name for a in accounts)
        return

    for account in accounts:
        try:
            session.directory.set_usage_location(account.object_id, options.usage_location)
            session.directory.assign_license(account.object_id, sku_id)
        except AdminClientError as e:
            logger.error("Licensing failed", upn=account.user_principal_name, error=str(e))
            report.failed.append(account.user_principal_name)
            continue
        logger.info(
            "Licensed resource account",
            upn=account.user_principal_name,
            usage_location=options.usage_location,
            license_sku=options.license_sku,
        )
        report.licensed.append(account.user_principal_name)
