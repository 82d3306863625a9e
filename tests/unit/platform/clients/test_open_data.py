"""HTTP-level tests for the open-data holiday client."""

import httpx
import pytest
import respx

from voice_admin.platform.clients.exceptions import AdminHTTPError, AdminProtocolError
from voice_admin.platform.clients.open_data import SEARCH_SQL_PATH, OpenDataClient

BASE_URL = "https://data.example.com/data"
RESOURCE_ID = "33673aca-0857-42e5-b8f0-9981b4755686"


@pytest.fixture
def client():
    with OpenDataClient(BASE_URL, RESOURCE_ID) as c:
        yield c


class TestOpenDataClient:
    def test_query_uses_lower_case_code(self, client):
        assert client.build_query("NSW") == f'SELECT * from "{RESOURCE_ID}" WHERE "Jurisdiction" LIKE \'nsw\''

    @respx.mock
    def test_query_holidays_returns_records(self, client):
        records = [{"Date": "20251226", "Holiday Name": "Boxing Day", "Jurisdiction": "nsw"}]
        route = respx.get(f"{BASE_URL}{SEARCH_SQL_PATH}").mock(
            return_value=httpx.Response(200, json={"success": True, "result": {"records": records}})
        )

        assert client.query_holidays("NSW") == records
        request = route.calls[0].request
        assert request.url.params["sql"] == client.build_query("NSW")
        assert "authorization" not in request.headers

    @respx.mock
    def test_unsuccessful_envelope(self, client):
        respx.get(f"{BASE_URL}{SEARCH_SQL_PATH}").mock(
            return_value=httpx.Response(200, json={"success": False, "error": {"message": "bad sql"}})
        )

        with pytest.raises(AdminProtocolError):
            client.query_holidays("NSW")

    @respx.mock
    def test_missing_records(self, client):
        respx.get(f"{BASE_URL}{SEARCH_SQL_PATH}").mock(
            return_value=httpx.Response(200, json={"success": True, "result": {}})
        )

        with pytest.raises(AdminProtocolError):
            client.query_holidays("NSW")

    @respx.mock
    @pytest.mark.parametrize("result", [None, [], "records"])
    def test_result_that_is_not_an_object(self, client, result):
        respx.get(f"{BASE_URL}{SEARCH_SQL_PATH}").mock(
            return_value=httpx.Response(200, json={"success": True, "result": result})
        )

        with pytest.raises(AdminProtocolError):
            client.query_holidays("NSW")

    @respx.mock
    def test_server_error(self, client):
        respx.get(f"{BASE_URL}{SEARCH_SQL_PATH}").mock(return_value=httpx.Response(503, text="down"))

        with pytest.raises(AdminHTTPError):
            client.query_holidays("NSW")
