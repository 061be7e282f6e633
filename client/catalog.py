"""Offline catalog mirror with the server's relevance ranking."""

import logging
from typing import List, Optional

from app.config import settings
from client.api import PotluckClient
from domain.enums import SearchMode
from domain.schemas.ingredient_schemas import IngredientResponse
from services.search import search_catalog

logger = logging.getLogger("potluck.client.catalog")


class CatalogMirror:
    """
    In-memory copy of ``/ingredients/all``.

    Once loaded, ``search`` ranks locally with the same function the server
    uses, so results match the remote endpoint. Until then it falls back to
    the remote search call.
    """

    def __init__(
        self,
        client: PotluckClient,
        lookup_limit: Optional[int] = None,
        browse_limit: Optional[int] = None,
        default_mode: Optional[SearchMode] = None,
        min_length: Optional[int] = None,
    ):
        self.client = client
        self.lookup_limit = lookup_limit or settings.search_lookup_limit
        self.browse_limit = browse_limit or settings.search_browse_limit
        self.default_mode = SearchMode(default_mode or settings.search_mode)
        self.min_length = min_length or settings.search_min_query_length
        self._entries: Optional[List[IngredientResponse]] = None

    @property
    def loaded(self) -> bool:
        return self._entries is not None

    def __len__(self) -> int:
        return len(self._entries or ())

    def load(self) -> int:
        """Fetch the full catalog; returns the number of entries mirrored."""
        self._entries = self.client.all_ingredients()
        logger.info("Catalog mirror loaded %d ingredients", len(self._entries))
        return len(self._entries)

    def invalidate(self) -> None:
        self._entries = None

    def limit_for(self, mode: Optional[SearchMode] = None) -> int:
        mode = SearchMode(mode or self.default_mode)
        return self.lookup_limit if mode == SearchMode.LOOKUP else self.browse_limit

    def search(self, query: str, mode: Optional[SearchMode] = None) -> List[IngredientResponse]:
        if self._entries is None:
            resolved = SearchMode(mode or self.default_mode)
            return self.client.search_ingredients(query, mode=resolved.value)
        return search_catalog(
            query, self._entries, self.limit_for(mode), min_length=self.min_length
        )

    def get(self, ingredient_id: int) -> IngredientResponse:
        """Direct lookup by id; bypasses ranking."""
        if self._entries is not None:
            for entry in self._entries:
                if entry.id == ingredient_id:
                    return entry
        return self.client.get_ingredient(ingredient_id)
