from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any

from .domain import FilterCategory, normalize
from .errors import InvalidArgument
from .options import SearchResult, recompute
from .state import MIN_QUERY_LENGTH, FilterState, Query
from .store import RecipeStore

logger = logging.getLogger(__name__)

ChangeListener = Callable[[SearchResult], None]


class FilterController:
    def __init__(
        self,
        store: RecipeStore,
        state: FilterState | None = None,
        on_change: ChangeListener | None = None,
        min_query_length: int = MIN_QUERY_LENGTH,
    ) -> None:
        self.store = store
        self.state = state if state is not None else FilterState()
        self.on_change = on_change
        self.min_query_length = min_query_length
        self._query = Query()
        self._result = self._recompute(notify=False)

    @property
    def query(self) -> Query:
        return self._query

    def current(self) -> SearchResult:
        return self._result

    def select_value(self, category: Any, raw_value: Any) -> SearchResult:
        cat, value = self._validate_selection(category, raw_value)
        if not self.state.add(cat, value):
            logger.debug("Ignoring duplicate %s selection %r", cat.value, value)
        return self._recompute()

    def deselect_value(self, category: Any, raw_value: Any) -> SearchResult:
        cat, value = self._validate_selection(category, raw_value)
        if not self.state.remove(cat, value):
            logger.debug("Ignoring deselection of unselected %s value %r", cat.value, value)
        return self._recompute()

    def set_query(self, raw_query: Any) -> SearchResult:
        if not isinstance(raw_query, str):
            logger.warning("Rejected non-string query of type %s", type(raw_query).__name__)
            raise InvalidArgument(f"Query must be a string, got {type(raw_query).__name__}")
        self._query = Query(raw_query)
        return self._recompute()

    def reset(self) -> SearchResult:
        self.state.clear()
        self._query = Query()
        return self._recompute()

    on_query_changed = set_query
    on_filter_value_selected = select_value
    on_filter_value_deselected = deselect_value
    on_reset_requested = reset

    def _validate_selection(self, category: Any, raw_value: Any) -> tuple[FilterCategory, str]:
        try:
            cat = FilterCategory.parse(category)
        except InvalidArgument:
            logger.warning("Rejected unknown filter category %r", category)
            raise
        if not isinstance(raw_value, str):
            logger.warning("Rejected non-string %s value of type %s", cat.value, type(raw_value).__name__)
            raise InvalidArgument(f"Filter value must be a string, got {type(raw_value).__name__}")
        value = normalize(raw_value)
        if not value:
            logger.warning("Rejected empty %s value", cat.value)
            raise InvalidArgument(f"Filter value for {cat.value} is empty")
        return cat, value

    def _recompute(self, notify: bool = True) -> SearchResult:
        self._result = recompute(self.store.indexed, self._query, self.state, self.min_query_length)
        if notify and self.on_change is not None:
            self.on_change(self._result)
        return self._result
