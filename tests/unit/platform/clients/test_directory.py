"""HTTP-level tests for the directory client."""

import json

import httpx
import pytest
import respx

from voice_admin.platform.clients.directory import DirectoryClient, DirectoryUser
from voice_admin.platform.clients.exceptions import AdminNotFoundError, AdminProtocolError

BASE_URL = "https://graph.example.com/v1.0"
AUTHORITY = "https://login.example.com"


@pytest.fixture
def client():
    with DirectoryClient(BASE_URL, authority=AUTHORITY) as c:
        yield c


USER = {
    "id": "u-1",
    "userPrincipalName": "jo@contoso.com",
    "displayName": "Jo Citizen",
    "givenName": "Jo",
    "surname": "Citizen",
    "businessPhones": ["+61 2 5550 0000"],
    "mobilePhone": "+61 400 000 000",
    "jobTitle": "Engineer",
    "officeLocation": "Sydney",
    "mail": "jo@contoso.com",
}


class TestDirectoryUser:
    def test_business_phone_preferred(self):
        assert DirectoryUser.from_api(USER).phone == "+61 2 5550 0000"

    def test_mobile_phone_fallback(self):
        assert DirectoryUser.from_api({**USER, "businessPhones": []}).phone == "+61 400 000 000"


class TestUsers:
    @respx.mock
    def test_get_user(self, client):
        route = respx.get(f"{BASE_URL}/users/jo%40contoso.com").mock(return_value=httpx.Response(200, json=USER))

        user = client.get_user("jo@contoso.com")

        assert user.id == "u-1"
        assert "userPrincipalName" in route.calls[0].request.url.params["$select"]

    @respx.mock
    def test_unknown_user(self, client):
        respx.get(f"{BASE_URL}/users/nobody%40contoso.com").mock(return_value=httpx.Response(404))

        with pytest.raises(AdminNotFoundError):
            client.get_user("nobody@contoso.com")

    @respx.mock
    def test_set_usage_location(self, client):
        route = respx.patch(f"{BASE_URL}/users/u-1").mock(return_value=httpx.Response(204))

        client.set_usage_location("u-1", "AU")

        assert json.loads(route.calls[0].request.content) == {"usageLocation": "AU"}


class TestLicences:
    @respx.mock
    def test_find_sku_id_is_case_insensitive(self, client):
        respx.get(f"{BASE_URL}/subscribedSkus").mock(
            return_value=httpx.Response(
                200,
                json={
                    "value": [
                        {"skuId": "sku-e5", "skuPartNumber": "SPE_E5"},
                        {"skuId": "sku-vu", "skuPartNumber": "PHONESYSTEM_VIRTUALUSER"},
                    ]
                },
            )
        )

        assert client.find_sku_id("phonesystem_virtualuser") == "sku-vu"

    @respx.mock
    def test_missing_sku(self, client):
        respx.get(f"{BASE_URL}/subscribedSkus").mock(return_value=httpx.Response(200, json={"value": []}))

        with pytest.raises(AdminNotFoundError):
            client.find_sku_id("PHONESYSTEM_VIRTUALUSER")

    @respx.mock
    def test_assign_license(self, client):
        route = respx.post(f"{BASE_URL}/users/u-1/assignLicense").mock(return_value=httpx.Response(200, json={}))

        client.assign_license("u-1", "sku-vu")

        body = json.loads(route.calls[0].request.content)
        assert body["addLicenses"] == [{"skuId": "sku-vu", "disabledPlans": []}]


class TestContacts:
    @respx.mock
    def test_create_contact(self, client):
        route = respx.post(f"{BASE_URL}/users/reception%40contoso.com/contacts").mock(
            return_value=httpx.Response(201, json={"id": "contact-1"})
        )

        contact_id = client.create_contact("reception@contoso.com", DirectoryUser.from_api(USER))

        assert contact_id == "contact-1"
        body = json.loads(route.calls[0].request.content)
        assert body["displayName"] == "Jo Citizen"
        assert body["businessPhones"] == ["+61 2 5550 0000"]
        assert body["emailAddresses"] == [{"address": "jo@contoso.com", "name": "Jo Citizen"}]


class TestTenantId:
    @respx.mock
    def test_resolve_tenant_id(self, client):
        route = respx.get(f"{AUTHORITY}/contoso.com/v2.0/.well-known/openid-configuration").mock(
            return_value=httpx.Response(
                200, json={"issuer": "https://login.example.com/9188040d-6c67-4c5b-b112-36a304b66dad/v2.0"}
            )
        )

        assert client.resolve_tenant_id("contoso.com") == "9188040d-6c67-4c5b-b112-36a304b66dad"
        assert "authorization" not in route.calls[0].request.headers

    @respx.mock
    def test_configuration_without_issuer(self, client):
        respx.get(f"{AUTHORITY}/contoso.com/v2.0/.well-known/openid-configuration").mock(
            return_value=httpx.Response(200, json={})
        )

        with pytest.raises(AdminProtocolError):
            client.resolve_tenant_id("contoso.com")
