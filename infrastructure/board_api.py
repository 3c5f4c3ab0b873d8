import asyncio
import logging
import random
import time
from typing import Any, Callable, Dict, List, Optional

import requests

from application.ports import ChildFetcher
from core import Board, SubItem
from infrastructure.board_parser import BoardPayloadError, parse_board, parse_sub_items

logger = logging.getLogger("miller.api")


class BoardApiError(RuntimeError):
    pass


class BoardNotFoundError(BoardApiError):
    pass


class BoardPermissionError(BoardApiError):
    pass


class BoardApiClient:
    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        timeout: int = 15,
        max_attempts: int = 3,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.token_provider = token_provider or (lambda: None)
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)

    # ----- reads ---------------------------------------------------------

    def get_board(self, slug: str) -> Board:
        payload = self._request("GET", f"/boards/{slug}/details")
        try:
            return parse_board(payload)
        except BoardPayloadError as exc:
            raise BoardApiError(f"unexpected board payload: {exc}") from exc

    def list_sub_items(self, item_id: int) -> List[SubItem]:
        payload = self._request("GET", f"/subtasks/task/{item_id}")
        try:
            return parse_sub_items(payload)
        except BoardPayloadError as exc:
            raise BoardApiError(f"unexpected subtask payload: {exc}") from exc

    # ----- writes --------------------------------------------------------

    def toggle_sub_item(self, sub_item_id: int) -> Dict[str, Any]:
        return self._request("PATCH", f"/subtasks/{sub_item_id}/toggle")

    def delete_sub_item(self, sub_item_id: int) -> None:
        self._request("DELETE", f"/subtasks/{sub_item_id}")

    def update_item(self, item_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/tasks/{item_id}", json=fields)

    def update_collection(self, collection_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/lists/{collection_id}", json=fields)

    # ----- transport -----------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        attempt = 0
        delay = 0.5
        while True:
            attempt += 1
            try:
                response = self.session.request(method, url, json=json, headers=self._headers(), timeout=self.timeout)
            except requests.RequestException as exc:
                if attempt >= self.max_attempts:
                    raise BoardApiError(f"network error: {exc}") from exc
                logger.warning("%s %s failed (%s), retry #%s", method, path, exc, attempt)
                self._sleep(delay)
                delay *= 2
                continue
            if response.status_code >= 500 and attempt < self.max_attempts:
                logger.warning("%s %s returned %s, retry #%s", method, path, response.status_code, attempt)
                self._sleep(delay)
                delay *= 2
                continue
            if response.status_code in (401, 403):
                raise BoardPermissionError(f"HTTP {response.status_code}")
            if response.status_code == 404:
                raise BoardNotFoundError(f"{path} not found")
            if response.status_code >= 400:
                raise BoardApiError(f"HTTP {response.status_code}: {response.text[:200]}")
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise BoardApiError(f"invalid JSON from {path}") from exc

    def _sleep(self, base_delay: float) -> None:
        time.sleep(base_delay + random.uniform(0, base_delay))


def sub_item_fetcher(client: BoardApiClient) -> ChildFetcher:
    """Adapt the blocking client to the event loop: the request runs in the default executor."""

    async def fetch(item_id: int) -> List[SubItem]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, client.list_sub_items, item_id)

    return fetch


__all__ = ["BoardApiClient", "BoardApiError", "BoardNotFoundError", "BoardPermissionError", "sub_item_fetcher"]
