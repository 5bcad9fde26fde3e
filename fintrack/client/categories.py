# fintrack/client/categories.py
import logging

import httpx

from fintrack.client.http import CLIENT_ERRORS, describe_error, request_json
from fintrack.client.state import ResourceState
from fintrack.core.routing import API_PREFIX
from fintrack.models.enums import EntryType
from fintrack.schemas.category import CategoryRead

logger = logging.getLogger(__name__)

CATEGORIES_URL = f"{API_PREFIX}/categories"

class CategoryStore:
    def __init__(self, http: httpx.AsyncClient):
        self._http = http
        self.state: ResourceState[CategoryRead] = ResourceState()

    @property
    def categories(self):
        return self.state.items

    async def fetch_categories(self) -> None:
        """Reload the list; failures are recorded in `state.error`, not raised."""
        self.state.begin()
        try:
            data = await request_json(self._http, "GET", CATEGORIES_URL)
            self.state.items = [CategoryRead.model_validate(item) for item in data]
        except CLIENT_ERRORS as e:
            self.state.error = describe_error(e, "Failed to fetch categories")
            logger.error(f"Error fetching categories: {e}")
        finally:
            self.state.loading = False

    async def create_category(self, name: str, type: EntryType) -> CategoryRead:
        self.state.begin()
        try:
            data = await request_json(
                self._http, "POST", CATEGORIES_URL,
                json={"name": name, "type": EntryType(type).value},
            )
            category = CategoryRead.model_validate(data)
            self.state.items.append(category)
            return category
        except CLIENT_ERRORS as e:
            self.state.error = describe_error(e, "Failed to create category")
            logger.error(f"Error creating category: {e}")
            raise
        finally:
            self.state.loading = False
