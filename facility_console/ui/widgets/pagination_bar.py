from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

# page buttons shown on each side of the current one
_WINDOW = 2
_BUTTON_WIDTH = 36


def visible_pages(page: int, pages: int, window: int = _WINDOW) -> list[int]:
    if pages <= 1:
        return []
    start = max(1, page - window)
    end = min(pages, page + window)
    return list(range(start, end + 1))


class PaginationBar(QWidget):
    page_requested = Signal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("paginationBar")
        self._page = 1
        self._pages = 0
        self._layout = QHBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(4)
        self._layout.addStretch(1)

        self.prev_btn = QPushButton("‹")
        self.prev_btn.setFixedWidth(_BUTTON_WIDTH)
        self.prev_btn.clicked.connect(lambda: self._request(self._page - 1))
        self.next_btn = QPushButton("›")
        self.next_btn.setFixedWidth(_BUTTON_WIDTH)
        self.next_btn.clicked.connect(lambda: self._request(self._page + 1))
        self.summary = QLabel()
        self.summary.setObjectName("muted")

        self._page_buttons: list[QPushButton] = []
        self._layout.addWidget(self.summary)
        self._layout.addWidget(self.prev_btn)
        self._buttons_at = self._layout.count()
        self._layout.addWidget(self.next_btn)
        self.setVisible(False)

    @property
    def page(self) -> int:
        return self._page

    @property
    def pages(self) -> int:
        return self._pages

    def set_state(self, page: int, pages: int) -> None:
        self._page = page
        self._pages = pages
        # a single page needs no paginator
        self.setVisible(pages > 1)
        for button in self._page_buttons:
            self._layout.removeWidget(button)
            button.deleteLater()
        self._page_buttons = []
        for offset, number in enumerate(visible_pages(page, pages)):
            button = QPushButton(str(number))
            button.setFixedWidth(_BUTTON_WIDTH)
            button.setCheckable(True)
            button.setChecked(number == page)
            button.clicked.connect(lambda _checked=False, n=number: self._request(n))
            self._layout.insertWidget(self._buttons_at + offset, button)
            self._page_buttons.append(button)
        self.prev_btn.setEnabled(page > 1)
        self.next_btn.setEnabled(page < pages)
        self.summary.setText(f"Page {page} of {pages}" if pages > 1 else "")

    def _request(self, page: int) -> None:
        if 1 <= page <= self._pages and page != self._page:
            self.page_requested.emit(page)
