"""Directory (Microsoft Graph) client.

Resolves users by principal name, manages usage location and licences,
creates mailbox contacts and resolves a domain to its tenant ID.
"""

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlparse

from voice_admin.platform.clients.base import ApiClient
from voice_admin.platform.clients.exceptions import AdminNotFoundError, AdminProtocolError

_USER_FIELDS = (
    "id",
    "userPrincipalName",
    "displayName",
    "givenName",
    "surname",
    "businessPhones",
    "mobilePhone",
    "jobTitle",
    "officeLocation",
    "mail",
)


@dataclass(frozen=True)
class DirectoryUser:
    """A directory user as needed for contact import and licensing."""

    id: str
    user_principal_name: str
    display_name: str | None = None
    given_name: str | None = None
    surname: str | None = None
    phone: str | None = None
    job_title: str | None = None
    office_location: str | None = None
    mail: str | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "DirectoryUser":
        phones = payload.get("businessPhones") or []
        return cls(
            id=payload["id"],
            user_principal_name=payload["userPrincipalName"],
            display_name=payload.get("displayName"),
            given_name=payload.get("givenName"),
            surname=payload.get("surname"),
            phone=phones[0] if phones else payload.get("mobilePhone"),
            job_title=payload.get("jobTitle"),
            office_location=payload.get("officeLocation"),
            mail=payload.get("mail"),
        )


class DirectoryClient(ApiClient):
    """Client for the directory API."""

    def __init__(self, base_url: str, *, authority: str = "https://login.microsoftonline.com", **kwargs):
        super().__init__(base_url, **kwargs)
        self._authority = authority.rstrip("/")

    def get_user(self, user_principal_name: str) -> DirectoryUser:
        """Look a user up by principal name.

        Raises:
            AdminNotFoundError: If no such user exists.
        """
        payload = self._request(
            "GET",
            f"/users/{quote(user_principal_name)}",
            params={"$select": ",".join(_USER_FIELDS)},
        )
        try:
            return DirectoryUser.from_api(payload)
        except (KeyError, TypeError) as e:
            raise AdminProtocolError(f"malformed user object: {e}") from e

    def set_usage_location(self, user_id: str, usage_location: str) -> None:
        self._request("PATCH", f"/users/{user_id}", json={"usageLocation": usage_location})

    def find_sku_id(self, sku_part_number: str) -> str:
        """Resolve a licence SKU part number to the tenant's SKU ID.

        Raises:
            AdminNotFoundError: If the tenant has no subscription for the SKU.
        """
        payload = self._request("GET", "/subscribedSkus") or {}
        for sku in payload.get("value", []):
            if sku.get("skuPartNumber", "").lower() == sku_part_number.lower():
                return sku["skuId"]
        raise AdminNotFoundError(f"no subscribed SKU named {sku_part_number}", url=self._url("/subscribedSkus"))

    def assign_license(self, user_id: str, sku_id: str) -> None:
        body = {"addLicenses": [{"skuId": sku_id, "disabledPlans": []}], "removeLicenses": []}
        self._request("POST", f"/users/{user_id}/assignLicense", json=body)

    def create_contact(self, mailbox: str, user: DirectoryUser) -> str:
        """Create a contact for a directory user in a mailbox.

        Returns:
            The new contact's ID.
        """
        address = user.mail or user.user_principal_name
        body: dict[str, Any] = {
            "givenName": user.given_name,
            "surname": user.surname,
            "displayName": user.display_name or user.user_principal_name,
            "jobTitle": user.job_title,
            "officeLocation": user.office_location,
            "businessPhones": [user.phone] if user.phone else [],
            "emailAddresses": [{"address": address, "name": user.display_name or address}],
        }
        payload = self._request("POST", f"/users/{quote(mailbox)}/contacts", json=body) or {}
        return payload.get("id", "")

    def resolve_tenant_id(self, domain: str) -> str:
        """Resolve a verified domain to its tenant ID.

        Reads the issuer of the identity provider's OpenID configuration,
        which embeds the tenant ID as its first path segment.
        """
        url = f"{self._authority}/{quote(domain.strip())}/v2.0/.well-known/openid-configuration"
        payload = self._request("GET", url, authenticated=False) or {}
        issuer = payload.get("issuer")
        if not issuer:
            raise AdminProtocolError("OpenID configuration has no issuer", url=url)
        segments = [s for s in urlparse(issuer).path.split("/") if s]
        if not segments:
            raise AdminProtocolError(f"unexpected issuer {issuer}", url=url)
        return segments[0]
