"""
Restaurant backend REST client.

The backend owns vendors, inventory, templates and submitted supply
requests. This client only shapes requests and turns failures into
BackendRequestError. Clients are built per request from settings; the
token pair lives in a BackendTokens holder shared across them, so a
refreshed access token outlives the client that refreshed it.
"""

from functools import lru_cache
from typing import Any, Optional
from urllib.parse import urljoin

import requests
import structlog

from config.settings import Settings, get_settings
from exceptions import BackendRequestError

logger = structlog.get_logger(__name__)


class BackendTokens:
    """Access/refresh token pair shared by every client built from it."""

    def __init__(self, access_token: Optional[str] = None, refresh_token: Optional[str] = None):
        self.access_token = access_token
        self.refresh_token = refresh_token

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackendTokens":
        return cls(
            access_token=settings.backend_access_token,
            refresh_token=settings.backend_refresh_token,
        )


@lru_cache()
def get_backend_tokens() -> BackendTokens:
    """
    Process-wide token holder, seeded from settings.

    Call get_backend_tokens.cache_clear() to reseed.
    """
    return BackendTokens.from_settings(get_settings())


class RestaurantBackendClient:
    """
    Thin wrapper around a requests.Session.

    Usage:
        with RestaurantBackendClient.from_settings(settings, get_backend_tokens()) as client:
            client.request_supply("greenfork", payload)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        user_role: str = "RESTAURANT",
        session: Optional[requests.Session] = None,
        tokens: Optional[BackendTokens] = None,
    ):
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.tokens = tokens or BackendTokens(access_token, refresh_token)
        self.user_role = user_role
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        tokens: Optional[BackendTokens] = None,
    ) -> "RestaurantBackendClient":
        return cls(
            base_url=settings.backend_url,
            timeout=settings.backend_timeout_seconds,
            user_role=settings.backend_user_role,
            tokens=tokens or BackendTokens.from_settings(settings),
        )

    @property
    def access_token(self) -> Optional[str]:
        return self.tokens.access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self.tokens.refresh_token

    def __enter__(self) -> "RestaurantBackendClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions

    def close(self) -> None:
        self.session.close()

    # ===================
    # TRANSPORT
    # ===================

    def _url(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict] = None,
        retry_auth: bool = True,
    ) -> Any:
        """
        Send one request and return the decoded body.

        An expired token (401, or 403 on the first attempt) triggers a
        single refresh and retry when a refresh token is configured.

        Returns:
            Parsed JSON, raw text for non-JSON bodies, or None for empty bodies

        Raises:
            BackendRequestError: On transport failure or non-2xx status
        """
        url = self._url(path)
        headers = {"Authorization": f"Bearer {self.access_token or ''}"}

        logger.debug("backend_request", method=method, path=path)

        try:
            response = self.session.request(
                method,
                url,
                json=json,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("backend_request_failed", method=method, path=path, error=str(e))
            raise BackendRequestError(
                f"Could not reach restaurant backend: {e}",
                path=path,
            ) from e

        if response.status_code in (401, 403) and retry_auth and self.refresh_token:
            logger.info("backend_token_expired", path=path, status=response.status_code)
            self._refresh_access_token()
            return self.request(method, path, json=json, params=params, retry_auth=False)

        if not response.ok:
            message = _error_message(response)
            logger.error(
                "backend_request_rejected",
                method=method,
                path=path,
                status=response.status_code,
                error=message,
            )
            raise BackendRequestError(message, status=response.status_code, path=path)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            return response.text

    def _refresh_access_token(self) -> None:
        """
        Exchange the refresh token for a new access token.

        Both tokens are written to the shared holder; a rotated refresh
        token replaces the old one.
        """
        try:
            response = self.session.post(
                self._url("auth/refresh-token"),
                json={"refreshToken": self.refresh_token, "role": self.user_role},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error("backend_token_refresh_failed", error=str(e))
            raise BackendRequestError("Session expired, please log in again", status=401) from e

        if not isinstance(body, dict):
            body = {}
        token = body.get("access_token")
        if not token:
            logger.error("backend_token_refresh_empty")
            raise BackendRequestError("Session expired, please log in again", status=401)

        self.tokens.access_token = token
        rotated = body.get("refresh_token") or body.get("refreshToken")
        if rotated:
            self.tokens.refresh_token = rotated
        logger.info("backend_token_refreshed", refresh_rotated=bool(rotated))

    # ===================
    # SUPPLY REQUESTS
    # ===================

    def request_supply(self, subdomain: str, items: list[dict]) -> Any:
        return self.request("POST", f"{subdomain}/supply-request/request", json=items)

    def get_supply_requests(self, subdomain: str) -> Any:
        return self.request("GET", f"{subdomain}/supply-request/all")

    def get_supply_request(self, subdomain: str, request_id: str) -> Any:
        return self.request("GET", f"{subdomain}/supply-request/{request_id}")

    # ===================
    # INVENTORY / RESUPPLY
    # ===================

    def request_resupply(self, subdomain: str, items: list[dict]) -> Any:
        return self.request("POST", f"{subdomain}/inventory/resupply", json=items)

    def get_inventory(self, subdomain: str, page: int = 1, limit: int = 100) -> list[dict]:
        """Inventory page; the backend wraps rows in {"data": [...]}."""
        payload = self.request(
            "GET",
            f"{subdomain}/inventory",
            params={"page": page, "limit": limit},
        )
        if isinstance(payload, dict):
            return payload.get("data") or []
        return payload or []

    # ===================
    # TEMPLATES
    # ===================

    def get_supply_request_templates(self, subdomain: str) -> list[dict]:
        return self.request("GET", f"{subdomain}/supply-request/templates") or []

    def apply_supply_request_template(self, subdomain: str, payload: dict) -> Any:
        template_id = payload["templateId"]
        return self.request(
            "POST",
            f"{subdomain}/supply-request/templates/{template_id}/apply",
            json=payload,
        )

    # ===================
    # VENDORS
    # ===================

    def get_vendors(self) -> list[dict]:
        """All vendors; the endpoint is not paginated."""
        payload = self.request("GET", "vendor")
        if isinstance(payload, dict):
            return payload.get("data") or []
        return payload or []

    # ===================
    # HEALTH
    # ===================

    def check_connection(self) -> dict:
        """
        Check backend reachability.

        Returns:
            dict: Connection status with details
        """
        try:
            response = self.session.get(self.base_url, timeout=self.timeout)
            return {
                "status": "healthy" if response.status_code < 500 else "unhealthy",
                "status_code": response.status_code,
            }
        except requests.exceptions.RequestException as e:
            return {
                "status": "unhealthy",
                "error": str(e)
            }


def _error_message(response: requests.Response) -> str:
    """Backend error text from {"message": ...} or {"error": ...}."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, list):
            message = "; ".join(str(m) for m in message)
        if message:
            return str(message)

    return f"Restaurant backend returned {response.status_code}"
