# fintrack/client/transactions.py
import logging
import uuid
from typing import Optional

import httpx

from fintrack.client.http import CLIENT_ERRORS, describe_error, request_json
from fintrack.client.state import ResourceState
from fintrack.core.routing import API_PREFIX
from fintrack.schemas.transaction import (
    TransactionCreate,
    TransactionFilters,
    TransactionRead,
    TransactionUpdate,
)

logger = logging.getLogger(__name__)

TRANSACTIONS_URL = f"{API_PREFIX}/transactions"

class TransactionStore:
    def __init__(self, http: httpx.AsyncClient):
        self._http = http
        self.state: ResourceState[TransactionRead] = ResourceState()

    @property
    def transactions(self):
        return self.state.items

    async def fetch_transactions(self, filters: Optional[TransactionFilters] = None) -> None:
        """Reload the list for the given filters; failures land in `state.error`."""
        self.state.begin()
        try:
            params = filters.to_query_params() if filters else {}
            data = await request_json(self._http, "GET", TRANSACTIONS_URL, params=params)
            self.state.items = [TransactionRead.model_validate(item) for item in data]
        except CLIENT_ERRORS as e:
            self.state.error = describe_error(e, "Failed to fetch transactions")
            logger.error(f"Error fetching transactions: {e}")
        finally:
            self.state.loading = False

    async def create_transaction(self, tx_in: TransactionCreate) -> TransactionRead:
        self.state.begin()
        try:
            data = await request_json(
                self._http, "POST", TRANSACTIONS_URL,
                json=tx_in.model_dump(mode="json", by_alias=True),
            )
            transaction = TransactionRead.model_validate(data)
            self.state.items.append(transaction)
            return transaction
        except CLIENT_ERRORS as e:
            self.state.error = describe_error(e, "Failed to create transaction")
            logger.error(f"Error creating transaction: {e}")
            raise
        finally:
            self.state.loading = False

    async def update_transaction(self, transaction_id: uuid.UUID, tx_in: TransactionUpdate) -> TransactionRead:
        self.state.begin()
        try:
            data = await request_json(
                self._http, "PUT", f"{TRANSACTIONS_URL}/{transaction_id}",
                json=tx_in.model_dump(mode="json", by_alias=True),
            )
            transaction = TransactionRead.model_validate(data)
            self.state.items = [
                transaction if item.id == transaction.id else item
                for item in self.state.items
            ]
            return transaction
        except CLIENT_ERRORS as e:
            self.state.error = describe_error(e, "Failed to update transaction")
            logger.error(f"Error updating transaction {transaction_id}: {e}")
            raise
        finally:
            self.state.loading = False

    async def delete_transaction(self, transaction_id: uuid.UUID) -> None:
        transaction_id = uuid.UUID(str(transaction_id))
        self.state.begin()
        try:
            await request_json(self._http, "DELETE", f"{TRANSACTIONS_URL}/{transaction_id}")
            self.state.items = [item for item in self.state.items if item.id != transaction_id]
        except CLIENT_ERRORS as e:
            self.state.error = describe_error(e, "Failed to delete transaction")
            logger.error(f"Error deleting transaction {transaction_id}: {e}")
            raise
        finally:
            self.state.loading = False
