# File: app/client/dashboard_client.py
"""
HTTP client for the Term Trends API, used by the dashboard store.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import requests

from settings import APIConfig


class ApiError(Exception):
    """Non-2xx response (or transport failure) from the API."""

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _iso(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class DashboardClient:
    def __init__(self, base_url: str = APIConfig.BASE_URL, session=None, timeout: int = APIConfig.REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": APIConfig.USER_AGENT})
        self.session = session

    # ---------- Search terms ----------

    def list_terms(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/search-terms").json()

    def grouped_terms(self) -> Dict[str, Any]:
        return self._request("GET", "/search-terms/grouped").json()

    def get_term(self, term_id) -> Dict[str, Any]:
        return self._request("GET", f"/search-terms/{term_id}").json()

    def create_term(self, term: str, category: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", "/search-terms", json={"term": term, "category": category}).json()

    def update_term(self, term_id, term: str, **fields) -> Dict[str, Any]:
        """Pass category=... to change it; leave it out to keep the stored one."""
        body = {"term": term}
        if "category" in fields:
            body["category"] = fields["category"]
        return self._request("PUT", f"/search-terms/{term_id}", json=body).json()

    def delete_term(self, term_id) -> None:
        self._request("DELETE", f"/search-terms/{term_id}")

    # ---------- Documents ----------

    def fetch_buckets(
        self,
        terms: Sequence[str] = (),
        granularity: str = "day",
        category: Optional[str] = None,
        match_field: str = "text",
    ) -> List[Dict[str, Any]]:
        params = self._query(terms, granularity, category, match_field)
        return self._request("GET", "/documents", params=params).json().get("buckets") or []

    def fetch_documents(
        self,
        terms: Sequence[str],
        start_date,
        end_date,
        granularity: str = "day",
        category: Optional[str] = None,
        match_field: str = "text",
        export: bool = False,
    ) -> List[Dict[str, Any]]:
        params = self._query(terms, granularity, category, match_field)
        if start_date is not None or end_date is not None:
            params["startDate"] = _iso(start_date)
            params["endDate"] = _iso(end_date)
        if export:
            params["export"] = "true"
        return self._request("GET", "/documents", params=params).json().get("documents") or []

    def fetch_export(self, terms: Sequence[str], start_date=None, end_date=None, **kwargs) -> List[Dict[str, Any]]:
        return self.fetch_documents(terms, start_date, end_date, export=True, **kwargs)

    def download_csv(self, terms: Sequence[str], start_date=None, end_date=None, match_field: str = "text") -> str:
        params = self._query(terms, "day", None, match_field)
        if start_date is not None and end_date is not None:
            params["startDate"] = _iso(start_date)
            params["endDate"] = _iso(end_date)
        return self._request("GET", "/documents/export.csv", params=params).text

    # ---------- Helpers ----------

    def _query(self, terms, granularity, category, match_field) -> Dict[str, Any]:
        params: Dict[str, Any] = {"granularity": granularity, "matchField": match_field}
        if terms:
            params["terms"] = list(terms)
        if category:
            params["category"] = category
        return params

    def _request(self, method: str, path: str, **kwargs):
        try:
            response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(None, f"Request to {path} failed: {e}") from e

        if response.status_code >= 400:
            try:
                message = response.json().get("detail") or response.text
            except ValueError:
                message = response.text
            raise ApiError(response.status_code, str(message))
        return response
