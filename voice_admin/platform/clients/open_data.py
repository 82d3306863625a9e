"""Open-data client for the public-holiday dataset.

Queries a CKAN ``datastore_search_sql`` endpoint, one request per
jurisdiction.
"""

from typing import Any

from voice_admin.platform.clients.base import ApiClient
from voice_admin.platform.clients.exceptions import AdminProtocolError

SEARCH_SQL_PATH = "/api/3/action/datastore_search_sql"


class OpenDataClient(ApiClient):
    """Client for the public-holiday dataset on a CKAN datastore."""

    def __init__(self, base_url: str, resource_id: str, **kwargs):
        super().__init__(base_url, **kwargs)
        self._resource_id = resource_id

    @property
    def resource_id(self) -> str:
        return self._resource_id

    def build_query(self, jurisdiction: str) -> str:
        code = jurisdiction.lower().replace("'", "''")
        return f'SELECT * from "{self._resource_id}" WHERE "Jurisdiction" LIKE \'{code}\''

    def query_holidays(self, jurisdiction: str) -> list[dict[str, Any]]:
        """Return the raw holiday rows published for a jurisdiction.

        Raises:
            AdminProtocolError: If the envelope is unsuccessful or has no records.
        """
        payload = self._request(
            "GET",
            SEARCH_SQL_PATH,
            params={"sql": self.build_query(jurisdiction)},
            authenticated=False,
        )
        url = self._url(SEARCH_SQL_PATH)
        if not isinstance(payload, dict) or not payload.get("success", False):
            error = payload.get("error") if isinstance(payload, dict) else None
            raise AdminProtocolError(f"query was not successful: {error}", url=url)

        result = payload.get("result")
        records = result.get("records") if isinstance(result, dict) else None
        if not isinstance(records, list):
            raise AdminProtocolError("response envelope has no records array", url=url)
        return records
