"""
HTTP client for the record store's /api/users routes
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from record_browser.settings import RECORD_STORE_URL
from record_store.models.user import UserResponse

logger = logging.getLogger(__name__)

USERS_PATH = "/api/users"


class RecordStoreRequestError(Exception):
    """A call to the record store failed in transport, returned a non-2xx status or an unreadable body"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.text}"
    if isinstance(body, dict) and body.get("error"):
        return f"HTTP {response.status_code}: {body['error']}"
    return f"HTTP {response.status_code}"


class UsersApiClient:
    """Thin async wrapper, one method per route"""

    def __init__(self, base_url: str = RECORD_STORE_URL, http_client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "UsersApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str = "", json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        url = f"{USERS_PATH}{path}"
        try:
            response = await self._client.request(method, url, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.warning(f"{method} {url} failed: {message}")
            raise RecordStoreRequestError(message, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise RecordStoreRequestError(f"Request to record store failed: {e}") from e
        return response

    def _decode(self, response: httpx.Response, many: bool = False):
        """Parse a 2xx body into user records; a malformed body is a failed request"""
        try:
            body = response.json()
            if many:
                return [UserResponse.model_validate(item) for item in body]
            return UserResponse.model_validate(body)
        except (ValueError, TypeError) as e:
            request = response.request
            logger.warning(f"{request.method} {request.url.path} returned an unreadable body: {e}")
            raise RecordStoreRequestError(
                f"Unexpected response from record store: {e}",
                status_code=response.status_code
            ) from e

    async def list_users(self) -> List[UserResponse]:
        response = await self._request("GET")
        return self._decode(response, many=True)

    async def create_user(self, name: str, email: str) -> UserResponse:
        response = await self._request("POST", json={"name": name, "email": email})
        return self._decode(response)

    async def update_user(self, user_id: int, name: str, email: str) -> UserResponse:
        response = await self._request("PUT", f"/{user_id}", json={"name": name, "email": email})
        return self._decode(response)

    async def delete_user(self, user_id: int) -> None:
        await self._request("DELETE", f"/{user_id}")
