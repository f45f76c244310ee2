"""
Storefront API Client

HTTP client for the storefront REST backend.
Attaches bearer tokens and refreshes them once on a 401.
"""

import logging
from typing import Any, Callable, Optional

import httpx

from ..errors import (
    AuthenticationError,
    NetworkConnectionError,
    NetworkError,
    NetworkTimeoutError,
    ServerError,
)
from ..models.auth import AuthTokens

logger = logging.getLogger(__name__)


class StorefrontClient:
    """
    Client for the storefront REST API.

    Every method returns the decoded JSON body. Transport failures raise
    NetworkError subclasses; error statuses and `success: false` bodies
    raise ServerError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_tokens_refreshed: Optional[Callable[[AuthTokens], None]] = None,
        on_auth_expired: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize storefront client.

        Args:
            base_url: Base URL of the REST API, including the `/api` prefix
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests, ASGI apps)
            on_tokens_refreshed: Called with the new tokens after a refresh
            on_auth_expired: Called when a refresh is rejected
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.tokens: Optional[AuthTokens] = None
        self.on_tokens_refreshed = on_tokens_refreshed
        self.on_auth_expired = on_auth_expired

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def set_tokens(self, tokens: Optional[AuthTokens]) -> None:
        self.tokens = tokens

    def _generate_headers(self, auth: bool) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if auth and self.tokens:
            headers["Authorization"] = f"Bearer {self.tokens.access_token}"
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        body: Optional[dict],
        auth: bool,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            return await self._http_client.request(
                method=method,
                url=url,
                headers=self._generate_headers(auth),
                json=body,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {method} {url}")
            raise NetworkTimeoutError() from e
        except httpx.ConnectError as e:
            logger.error(f"Connection failed: {method} {url} - {e}")
            raise NetworkConnectionError() from e
        except httpx.TransportError as e:
            logger.error(f"Transport error: {method} {url} - {e}")
            raise NetworkError() from e

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        auth: bool = True,
    ) -> dict[str, Any]:
        """Make an HTTP request, refreshing the access token once on 401"""
        response = await self._send(method, path, body, auth)

        if response.status_code == 401 and auth:
            if not await self._refresh_tokens():
                self._expire_session()
                raise AuthenticationError(
                    self._error_message(response, AuthenticationError.default_message),
                    status_code=401,
                    payload=self._decode(response),
                )
            response = await self._send(method, path, body, auth)

        return self._parse(response)

    async def _refresh_tokens(self) -> bool:
        """Exchange the refresh token for a new access token"""
        if not self.tokens or not self.tokens.refresh_token:
            return False

        response = await self._send(
            "POST",
            "/auth/refresh-token",
            {"refreshToken": self.tokens.refresh_token},
            auth=False,
        )
        if response.status_code >= 400:
            logger.warning(f"Token refresh rejected: {response.status_code}")
            return False

        data = self._decode(response) or {}
        access_token = data.get("accessToken")
        if not access_token:
            logger.warning("Token refresh response carried no access token")
            return False

        self.tokens = AuthTokens(
            access_token=access_token,
            refresh_token=data.get("refreshToken") or self.tokens.refresh_token,
        )
        logger.info("Refreshed access token")
        if self.on_tokens_refreshed:
            self.on_tokens_refreshed(self.tokens)
        return True

    def _expire_session(self) -> None:
        self.tokens = None
        if self.on_auth_expired:
            self.on_auth_expired()

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _error_message(self, response: httpx.Response, default: str) -> str:
        body = self._decode(response)
        if isinstance(body, dict):
            # `{success, error}` bodies put the user message in `error`
            keys = ("error", "message", "detail") if "success" in body else ("message", "error", "detail")
            for key in keys:
                if isinstance(body.get(key), str) and body[key]:
                    return body[key]
        return default

    def _parse(self, response: httpx.Response) -> dict[str, Any]:
        body = self._decode(response)

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise ServerError(
                self._error_message(response, ServerError.default_message),
                status_code=response.status_code,
                payload=body,
            )

        if not isinstance(body, dict):
            raise ServerError("Unexpected response from server", response.status_code, body)

        if body.get("success") is False:
            raise ServerError(
                self._error_message(response, ServerError.default_message),
                status_code=response.status_code,
                payload=body,
            )

        return body

    # ==================== Auth APIs ====================

    async def login(self, email: str, password: str) -> dict:
        """Exchange credentials for a token pair"""
        return await self._request(
            "POST",
            "/auth/login",
            body={"email": email, "password": password},
            auth=False,
        )

    async def get_profile(self) -> dict:
        """Get the authenticated user's profile"""
        return await self._request("GET", "/auth/profile")

    async def logout(self, refresh_token: str) -> dict:
        """Invalidate the refresh token server-side"""
        return await self._request(
            "POST",
            "/auth/logout",
            body={"refreshToken": refresh_token},
            auth=False,
        )

    # ==================== Cart APIs ====================

    async def get_cart(self) -> dict:
        """Get the authenticated user's cart"""
        return await self._request("GET", "/cart")

    async def add_cart_item(
        self,
        product_id: str,
        quantity: int = 1,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> dict:
        """Add item to cart"""
        return await self._request(
            "POST",
            "/cart",
            body={"productId": product_id, "quantity": quantity, "size": size, "color": color},
        )

    async def update_cart_item(self, cart_entry_id: str, quantity: int) -> dict:
        """Update item quantity in cart"""
        return await self._request(
            "PATCH",
            f"/cart/{cart_entry_id}",
            body={"quantity": quantity},
        )

    async def remove_cart_item(self, cart_entry_id: str) -> dict:
        """Remove item from cart"""
        return await self._request("DELETE", f"/cart/{cart_entry_id}")

    async def clear_cart(self) -> dict:
        """Bulk-clear the cart (endpoint may be absent)"""
        return await self._request("DELETE", "/cart")

    # ==================== Wishlist APIs ====================

    async def get_wishlist(self) -> dict:
        return await self._request("GET", "/wishlist")

    async def add_wishlist_item(self, product_id: str) -> dict:
        return await self._request("POST", "/wishlist", body={"productId": product_id})

    async def remove_wishlist_item(self, item_id: str) -> dict:
        return await self._request("DELETE", f"/wishlist/{item_id}")

    async def clear_wishlist(self) -> dict:
        return await self._request("DELETE", "/wishlist")

    # ==================== Promotion APIs ====================

    async def verify_coupon(self, code: str) -> dict:
        """Verify a coupon code"""
        return await self._request(
            "POST",
            "/promotions/verify-coupon",
            body={"couponCode": code},
        )

    # ==================== Order APIs ====================

    async def create_order(self, payload: dict) -> dict:
        """Place an order"""
        return await self._request("POST", "/orders", body=payload)

    async def get_order(self, order_id: str) -> dict:
        """Get order details"""
        return await self._request("GET", f"/orders/{order_id}")
