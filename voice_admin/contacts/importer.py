"""Import directory users as contacts in a mailbox."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from voice_admin.platform.clients.exceptions import AdminClientError, AdminNotFoundError
from voice_admin.platform.observability import get_logger
from voice_admin.platform.session import AdminSession

logger = get_logger(__name__)


@dataclass
class ContactImportReport:
    imported: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed


def import_contacts(
    session: AdminSession,
    upns: Iterable[str],
    mailbox: str,
    dry_run: bool = False,
) -> ContactImportReport:
    """Look each principal name up and create it as a contact in ``mailbox``.

    A user that cannot be resolved is logged and skipped.
    """
    report = ContactImportReport(dry_run=dry_run)
    for upn in upns:
        try:
            user = session.directory.get_user(upn)
        except AdminNotFoundError:
            logger.warning("User not found in directory", upn=upn)
            report.not_found.append(upn)
            continue
        except AdminClientError as e:
            logger.error("User lookup failed", upn=upn, error=str(e))
            report.failed.append(upn)
            continue

        details = {
            "upn": upn,
            "name": user.display_name,
            "phone": user.phone,
            "title": user.job_title,
            "office": user.office_location,
            "object_id": user.id,
        }
        if dry_run:
            logger.info("Dry run: would import contact", mailbox=mailbox, **details)
            report.imported.append(upn)
            continue

        try:
            contact_id = session.directory.create_contact(mailbox, user)
        except AdminClientError as e:
            logger.error("Contact creation failed", mailbox=mailbox, upn=upn, error=str(e))
            report.failed.append(upn)
            continue

        logger.info("Imported contact", mailbox=mailbox, contact_id=contact_id, **details)
        report.imported.append(upn)
    return report
