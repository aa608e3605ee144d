# app/web/view.py
import logging
from typing import Any, Dict, List, Optional

import httpx

from app.web.formatting import total_balance

logger = logging.getLogger(__name__)

TRANSACTIONS_ENDPOINT = "/api/transactions"


def empty_form() -> Dict[str, str]:
    return {
        "amount": "",
        "description": "",
        "category": "",
        "type": "expense",
        "date": "",
    }


class ApiRequestError(Exception):
    """The API answered with a non-success status."""


def _read_payload(response: httpx.Response, fallback: str) -> Dict[str, Any]:
    payload = response.json()
    if not isinstance(payload, dict):
        raise ApiRequestError(fallback)
    if not response.is_success:
        raise ApiRequestError(payload.get("error") or fallback)
    return payload


class TransactionsView:
    """Client-side state of the transactions page.

    Holds the fetched list, the loading/submitting/error flags and the
    in-progress form. Every request error ends up in ``error``; nothing
    raised by the API call escapes ``load()`` or ``submit()``.
    """

    def __init__(self, client: httpx.AsyncClient, endpoint: str = TRANSACTIONS_ENDPOINT):
        self.client = client
        self.endpoint = endpoint
        self.transactions: List[Dict[str, Any]] = []
        self.loading = True
        self.submitting = False
        self.error: Optional[str] = None
        self.form_values = empty_form()

    @property
    def total_balance(self) -> float:
        return total_balance(self.transactions)

    @property
    def show_loading(self) -> bool:
        return self.loading

    @property
    def show_error(self) -> bool:
        return bool(self.error)

    @property
    def show_empty_state(self) -> bool:
        return not self.loading and not self.transactions and not self.error

    async def load(self) -> None:
        self.loading = True
        try:
            response = await self.client.get(self.endpoint)
            payload = _read_payload(response, "Failed to load transactions")
            self.transactions = list(payload.get("data") or [])
            self.error = None
        except (httpx.HTTPError, ValueError, ApiRequestError) as e:
            logger.warning(f"Loading transactions failed: {str(e)}")
            self.error = str(e) or "Failed to load transactions"
        finally:
            self.loading = False

    def update_field(self, name: str, value: str) -> None:
        if name not in self.form_values:
            raise KeyError(name)
        self.form_values[name] = value

    def prepend(self, record: Dict[str, Any]) -> None:
        """Put a server-acknowledged record at the head of the list."""
        self.transactions = [record, *self.transactions]

    async def submit(self) -> bool:
        """Send the form to the API; returns True when the record was created."""
        if self.submitting:
            return False

        self.submitting = True
        self.error = None
        try:
            response = await self.client.post(self.endpoint, json=dict(self.form_values))
            payload = _read_payload(response, "Failed to save transaction")
            if not isinstance(payload.get("data"), dict):
                raise ApiRequestError("Failed to save transaction")
            self.prepend(payload["data"])
            self.form_values = empty_form()
            return True
        except (httpx.HTTPError, ValueError, ApiRequestError) as e:
            logger.warning(f"Saving transaction failed: {str(e)}")
            self.error = str(e) or "Failed to save transaction"
            return False
        finally:
            self.submitting = False
