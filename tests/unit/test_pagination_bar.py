from __future__ import annotations

from facility_console.ui.widgets.pagination_bar import PaginationBar, visible_pages


def test_visible_pages_window() -> None:
    assert visible_pages(1, 1) == []
    assert visible_pages(1, 10) == [1, 2, 3]
    assert visible_pages(5, 10) == [3, 4, 5, 6, 7]
    assert visible_pages(10, 10) == [8, 9, 10]


def test_bar_hidden_for_single_page(qapp) -> None:
    bar = PaginationBar()

    bar.set_state(1, 1)
    assert bar.isHidden()

    bar.set_state(1, 3)
    assert not bar.isHidden()
    assert bar.summary.text() == "Page 1 of 3"
    assert bar.prev_btn.isEnabled() is False
    assert bar.next_btn.isEnabled() is True


def test_navigation_emits_requested_page(qapp) -> None:
    bar = PaginationBar()
    requested: list[int] = []
    bar.page_requested.connect(requested.append)
    bar.set_state(2, 3)

    bar.next_btn.click()
    bar.prev_btn.click()

    assert requested == [3, 1]


def test_current_page_is_not_requested_again(qapp) -> None:
    bar = PaginationBar()
    requested: list[int] = []
    bar.page_requested.connect(requested.append)
    bar.set_state(3, 3)

    bar._request(3)
    bar._request(4)

    assert requested == []
