from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from facility_console.application.dto.query_dto import QueryParams


class QueryStateStore(QObject):
    """Owns the sort/page/filter tuple of one list screen.

    Every mutation emits ``changed`` with the new params; the list
    controller treats that as the only trigger for a list refetch.
    """

    changed = Signal(object)

    def __init__(
        self,
        default_sort: str,
        page_size: int,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._defaults = QueryParams(sorting=default_sort, max_result_count=page_size)
        self._params = self._defaults

    @property
    def params(self) -> QueryParams:
        return self._params

    @property
    def page(self) -> int:
        return self._params.page

    def set_sorting(self, value: str) -> None:
        # keeps skip_count, so the current page survives a re-sort
        self._replace(self._params.model_copy(update={"sorting": value}))

    def set_page(self, page: int) -> None:
        self._replace(self._params.for_page(page))

    def set_filter(self, text: str) -> None:
        self._replace(self._params.model_copy(update={"filter": text, "skip_count": 0}))

    def reset(self) -> None:
        self._replace(self._defaults)

    def _replace(self, params: QueryParams) -> None:
        self._params = params
        self.changed.emit(params)
