from __future__ import annotations

from PySide6.QtCore import QSignalBlocker, Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from facility_console.ui.controllers.resource_list_controller import ResourceListController
from facility_console.ui.resources.draft_form import DraftFormWidget
from facility_console.ui.resources.edit_dialog import EditDialog
from facility_console.ui.widgets.notifications import clear_status, set_status
from facility_console.ui.widgets.pagination_bar import PaginationBar
from facility_console.ui.widgets.table_utils import ROW_DATA_ROLE, fill_table, resize_columns_by_first_row


def next_sorting(current: str, key: str) -> str:
    """Clicking the sorted column flips its direction; any other column sorts ascending."""
    field, _, direction = current.partition(" ")
    if field == key:
        return f"{key} {'DESC' if direction.upper() == 'ASC' else 'ASC'}"
    return f"{key} ASC"


class ResourceListView(QWidget):
    def __init__(self, controller: ResourceListController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self.draft_form: DraftFormWidget | None = None
        self.edit_dialog: EditDialog | None = None
        self._columns = controller.config.columns
        self._build_ui()

        controller.list_changed.connect(self._render_list)
        controller.form_changed.connect(self._render_form)
        controller.references_changed.connect(self._on_references_changed)
        self._render_list()
        self._render_form()

    def _build_ui(self) -> None:
        config = self.controller.config
        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        layout.setContentsMargins(12, 12, 12, 12)

        title = QLabel(f"Manage {config.title}")
        title.setObjectName("pageTitle")
        layout.addWidget(title)

        form = self.controller.form
        if form is not None:
            self.create_box = QGroupBox(f"Add {config.singular.capitalize()}")
            self.create_box.setCheckable(True)
            self.create_box.setChecked(True)
            box_layout = QVBoxLayout(self.create_box)
            self.draft_form = DraftFormWidget(form, self.controller.options)
            self.draft_form.retry_requested.connect(self.controller.retry_reference)
            box_layout.addWidget(self.draft_form)
            self.name_warning = QLabel()
            self.name_warning.setObjectName("muted")
            self.name_warning.setWordWrap(True)
            box_layout.addWidget(self.name_warning)

            actions = QHBoxLayout()
            actions.addStretch()
            self.clear_btn = QPushButton("Clear all")
            self.clear_btn.setObjectName("secondaryButton")
            self.clear_btn.clicked.connect(self.controller.clear_form)
            self.create_btn = QPushButton("Create")
            self.create_btn.setObjectName("primaryButton")
            self.create_btn.clicked.connect(self.controller.submit)
            actions.addWidget(self.clear_btn)
            actions.addWidget(self.create_btn)
            box_layout.addLayout(actions)
            layout.addWidget(self.create_box)

        controls = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText(f"Search {config.title.lower()}")
        self.search_input.setClearButtonEnabled(True)
        self.search_input.returnPressed.connect(self.controller.search_now)
        self.search_input.textChanged.connect(self.controller.on_search_change)
        controls.addWidget(self.search_input, 1)
        self.reset_btn = QPushButton("Reset")
        self.reset_btn.setObjectName("secondaryButton")
        self.reset_btn.clicked.connect(self._reset_query)
        controls.addWidget(self.reset_btn)
        layout.addLayout(controls)

        self.status_label = QLabel()
        clear_status(self.status_label)
        layout.addWidget(self.status_label)

        self.table = QTableWidget(0, len(self._columns))
        self.table.setHorizontalHeaderLabels([column.header for column in self._columns])
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setAlternatingRowColors(True)
        self.table.verticalHeader().setVisible(False)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        header.setStretchLastSection(True)
        header.setSectionsClickable(True)
        header.sectionClicked.connect(self._on_header_clicked)
        if self.controller.can_edit:
            self.table.itemDoubleClicked.connect(self._on_row_activated)
        layout.addWidget(self.table, 1)

        self.pagination = PaginationBar()
        self.pagination.page_requested.connect(self.controller.on_page_change)
        layout.addWidget(self.pagination)

    def _render_list(self) -> None:
        controller = self.controller
        fill_table(self.table, self._columns, controller.items)
        resize_columns_by_first_row(self.table)
        self._render_sort_indicator()
        self.pagination.set_state(controller.current_page, controller.total_pages)
        if controller.is_fetching:
            set_status(self.status_label, "Loading…", "info")
        elif controller.load_state == "failed":
            set_status(self.status_label, controller.load_error or "Could not load data", "error")
        elif controller.load_state == "loaded" and not controller.items:
            set_status(self.status_label, f"No {controller.config.title.lower()} found", "info")
        else:
            clear_status(self.status_label)

    def _render_sort_indicator(self) -> None:
        field, _, direction = self.controller.query.sorting.partition(" ")
        header = self.table.horizontalHeader()
        for index, column in enumerate(self._columns):
            if column.sort_key == field:
                order = Qt.SortOrder.DescendingOrder if direction.upper() == "DESC" else Qt.SortOrder.AscendingOrder
                header.setSortIndicatorShown(True)
                header.setSortIndicator(index, order)
                return
        header.setSortIndicatorShown(False)

    def _render_form(self) -> None:
        form = self.controller.form
        if form is None:
            return
        warning = form.name_warning
        self.name_warning.setText(warning or "")
        self.name_warning.setVisible(warning is not None)
        self.create_btn.setEnabled(self.controller.submit_enabled)
        self.clear_btn.setEnabled(self.controller.clear_enabled)

    def _on_references_changed(self, field: str) -> None:
        if self.draft_form is None:
            return
        self.draft_form.refresh_options(field)
        self.draft_form.set_unavailable(field, self.controller.references.is_unavailable(field))
        if self.edit_dialog is not None:
            self.edit_dialog.refresh_options(field)

    def _reset_query(self) -> None:
        with QSignalBlocker(self.search_input):
            self.search_input.clear()
        self.controller.reset_query()

    def _on_header_clicked(self, index: int) -> None:
        key = self._columns[index].sort_key
        if key is None:
            self._render_sort_indicator()
            return
        self.controller.on_sort(next_sorting(self.controller.query.sorting, key))

    def _on_row_activated(self, item: QTableWidgetItem) -> None:
        first = self.table.item(item.row(), 0)
        if first is None:
            return
        row = first.data(ROW_DATA_ROLE)
        items = self.controller.items
        if row is None or not 0 <= row < len(items):
            return
        edit = self.controller.edit
        if edit is None:
            return
        if self.edit_dialog is None:
            self.edit_dialog = EditDialog(edit, self.controller.options, parent=self)
        self.controller.open_edit(items[row])
        self.edit_dialog.open()
