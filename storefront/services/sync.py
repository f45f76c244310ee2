"""
Local/remote authority switching shared by the cart and the wishlist.

While unauthenticated a collection lives in the local store. Once a token
is available the backend is authoritative: each mutation goes straight to
the API and the server's full response replaces local state. Concurrent
mutations are not ordered; the last response to arrive wins.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, ClassVar, Generic, Optional, TypeVar

import pydantic
from pydantic import BaseModel, TypeAdapter

from ..errors import NetworkError, ServerError, StorefrontError
from ..storage.local_store import LocalStore
from .api_client import StorefrontClient

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class SyncState(str, Enum):
    """Which store is authoritative for a collection"""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_SYNCING = "authenticated_syncing"
    AUTHENTICATED_SYNCED = "authenticated_synced"


class NetworkErrorPolicy(str, Enum):
    """What a mutation does locally when the API is unreachable"""
    FAIL = "fail"
    OPTIMISTIC_LOCAL = "optimistic_local"


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff for network-class errors"""
    max_retries: int = 0
    initial_delay: float = 1.0

    def delay_for(self, attempt: int) -> float:
        return self.initial_delay * (2 ** attempt)


@dataclass
class OperationResult:
    """Outcome of a store operation; failures are reported, not raised"""
    success: bool
    data: Any = None
    error: Optional[StorefrontError] = None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


class SyncedCollection(Generic[T]):
    """
    Base for collections with dual local/remote authority.

    Subclasses set `storage_key` and `item_model` and implement
    `_fetch_remote` and `_parse_remote`.
    """

    storage_key: ClassVar[str]
    item_model: ClassVar[type]

    def __init__(
        self,
        client: StorefrontClient,
        storage: LocalStore,
        network_error_policy: NetworkErrorPolicy = NetworkErrorPolicy.FAIL,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.client = client
        self.storage = storage
        self.network_error_policy = network_error_policy
        self.retry_policy = retry_policy or RetryPolicy()
        self.state = SyncState.UNAUTHENTICATED
        self.items: list[T] = []
        self.error: Optional[str] = None
        self.loading = False
        self._adapter = TypeAdapter(list[self.item_model])

    @property
    def is_remote(self) -> bool:
        return self.state is not SyncState.UNAUTHENTICATED

    # ==================== Local snapshot ====================

    def hydrate(self) -> None:
        """Load the local snapshot; unusable snapshots are discarded"""
        raw = self.storage.get_json(self.storage_key)
        if raw is None:
            self.items = []
            return

        try:
            self.items = self._adapter.validate_python(raw)
        except pydantic.ValidationError as e:
            logger.warning(f"Discarding invalid '{self.storage_key}' snapshot: {e.error_count()} errors")
            self.storage.remove(self.storage_key)
            self.items = []

    def persist(self) -> None:
        self.storage.set_json(
            self.storage_key,
            self._adapter.dump_python(self.items, mode="json", by_alias=True),
        )

    def _set_items(self, items: list[T]) -> None:
        self.items = list(items)
        self.persist()

    # ==================== Authority transitions ====================

    async def on_authenticated(self) -> OperationResult:
        """Fetch the remote collection and make it the local state"""
        self.state = SyncState.AUTHENTICATED_SYNCING
        logger.info(f"Syncing {self.storage_key} from server")

        result = await self._run_remote(self._fetch_remote)
        if result.success:
            self.state = SyncState.AUTHENTICATED_SYNCED
        else:
            logger.warning(f"Keeping local {self.storage_key} snapshot: {result.message}")
        return result

    def on_logout(self) -> None:
        self.state = SyncState.UNAUTHENTICATED

    # ==================== Remote calls ====================

    async def _call_remote(self, operation: Callable[[], Awaitable[dict]]) -> dict:
        """Run `operation`, retrying network errors per the retry policy"""
        attempt = 0
        while True:
            try:
                return await operation()
            except NetworkError as e:
                if attempt >= self.retry_policy.max_retries:
                    raise
                delay = self.retry_policy.delay_for(attempt)
                attempt += 1
                logger.warning(
                    f"{self.storage_key} request failed ({e.message}); "
                    f"retry {attempt}/{self.retry_policy.max_retries} in {delay}s"
                )
                await asyncio.sleep(delay)

    async def _run_remote(
        self,
        operation: Callable[[], Awaitable[dict]],
        optimistic: Optional[Callable[[], list[T]]] = None,
    ) -> OperationResult:
        """
        Send a mutation and replace local state with the server's response.

        On a network error, `optimistic` is applied only under the
        OPTIMISTIC_LOCAL policy; the error is recorded either way.
        """
        self.loading = True
        self.error = None
        try:
            payload = await self._call_remote(operation)
            items = self._parse_payload(payload)
        except NetworkError as e:
            if optimistic is not None and self.network_error_policy is NetworkErrorPolicy.OPTIMISTIC_LOCAL:
                logger.warning(f"Applying {self.storage_key} change locally: {e.message}")
                self._set_items(optimistic())
            return self._fail(e)
        except StorefrontError as e:
            return self._fail(e)
        finally:
            self.loading = False

        self._set_items(items)
        return OperationResult(success=True, data=self.items)

    def _parse_payload(self, payload: dict) -> list[T]:
        try:
            return self._parse_remote(payload)
        except (pydantic.ValidationError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected {self.storage_key} response: {e}")
            raise ServerError("Unexpected response from server", payload=payload) from e

    def _resolvable(self, entries: list[dict]) -> list[dict]:
        """Entries whose product still exists; deleted products come back as null"""
        kept = []
        for entry in entries:
            if not entry.get("productId"):
                logger.warning(f"Skipping {self.storage_key} entry {entry.get('_id')}: product no longer exists")
                continue
            kept.append(entry)
        return kept

    def _fail(self, error: StorefrontError) -> OperationResult:
        self.error = error.message
        logger.error(f"{self.storage_key} operation failed: {error.message}")
        return OperationResult(success=False, error=error)

    async def _fetch_remote(self) -> dict:
        raise NotImplementedError

    def _parse_remote(self, payload: dict) -> list[T]:
        raise NotImplementedError
