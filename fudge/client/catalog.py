"""Состояние каталога для экранов: список, пагинация, загрузка, ошибка."""
from typing import List, Optional, Union

from fudge.client.api import ApiError
from fudge.client.models import Pagination, SearchFilters, Sweet
from fudge.client.services import SweetsService

LISTING_LIMIT = 12


class SweetCatalog:
    def __init__(self, service: SweetsService, initial_filters: Union[SearchFilters, dict, None] = None):
        self.service = service
        self.initial_filters = initial_filters
        self.sweets: List[Sweet] = []
        self.pagination: Optional[Pagination] = None
        self.is_loading = False
        self.error: Optional[str] = None

    def fetch(self, filters: Union[SearchFilters, dict, None] = None) -> List[Sweet]:
        """С фильтрами - поиск, без - первая страница каталога."""
        self.is_loading = True
        self.error = None
        try:
            if filters is not None and not isinstance(filters, SearchFilters):
                filters = SearchFilters.model_validate(filters)
            if filters is not None and not filters.is_empty():
                result = self.service.search(filters)
            else:
                result = self.service.list(page=1, limit=LISTING_LIMIT)
            self.sweets = result.data
            self.pagination = result.pagination
        except ApiError as e:
            self.error = e.message or "Failed to fetch sweets"
        finally:
            self.is_loading = False
        return self.sweets

    def refetch(self) -> List[Sweet]:
        return self.fetch(self.initial_filters)

    def _replace(self, updated: Sweet) -> Sweet:
        self.sweets = [updated if s.id == updated.id else s for s in self.sweets]
        return updated

    def create(self, data) -> Sweet:
        sweet = self.service.create(data)
        self.sweets = [sweet] + self.sweets
        return sweet

    def update(self, sweet_id: int, data) -> Sweet:
        return self._replace(self.service.update(sweet_id, data))

    def delete(self, sweet_id: int) -> None:
        self.service.delete(sweet_id)
        self.sweets = [s for s in self.sweets if s.id != sweet_id]

    def purchase(self, sweet_id: int, quantity: int = 1) -> Sweet:
        return self._replace(self.service.purchase(sweet_id, quantity))

    def restock(self, sweet_id: int, quantity: int) -> Sweet:
        return self._replace(self.service.restock(sweet_id, quantity))
