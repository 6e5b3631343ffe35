"""Generic record table used by every admin page.

The table knows nothing about the entity it shows. Columns and form fields
are declared with descriptors, and every mutation goes through async
callbacks supplied by the page controller; the table itself never talks to
the backend.
"""

import copy
import logging
import math
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from app.core.config import settings
from app.models.table import (
    Cell,
    CellStyle,
    ColumnDescriptor,
    DialogMode,
    DialogView,
    FieldKind,
    FormField,
    TableRow,
    TableView,
)

logger = logging.getLogger(__name__)

RecordCallback = Callable[[Dict[str, Any]], Awaitable[Any]]
RowLink = Callable[[Dict[str, Any]], Optional[str]]

STATUS_TONES = {"active": "green", "pending": "yellow"}
TRUTHY_FORM_VALUES = {"on", "true", "1", "yes"}

LOADING_MESSAGE = "Loading data..."
NO_DATA_MESSAGE = "No data"
NO_RESULTS_MESSAGE = "No results found"


def get_field_value(record: Any, path: str) -> Any:
    """Resolve a dotted path (``author.name``) inside nested dicts.

    Returns None as soon as a segment is missing.
    """
    value = record
    for segment in path.split("."):
        if isinstance(value, Mapping):
            value = value.get(segment)
        else:
            value = getattr(value, segment, None)
        if value is None:
            return None
    return value


def set_field_value(record: Dict[str, Any], path: str, value: Any) -> None:
    """Write a value at a dotted path, creating intermediate dicts."""
    segments = path.split(".")
    target = record
    for segment in segments[:-1]:
        child = target.get(segment)
        if not isinstance(child, dict):
            child = {}
            target[segment] = child
        target = child
    target[segments[-1]] = value


def resolve_value(record: Dict[str, Any], column: ColumnDescriptor) -> Any:
    if column.accessor is not None:
        return column.accessor(record)
    return get_field_value(record, column.field_path)


def format_number(value: Any) -> str:
    """Locale-style number with thousands separators, at most 3 decimals."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if math.isnan(number) or math.isinf(number):
        return str(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def status_tone(value: Any) -> str:
    return STATUS_TONES.get(str(value).lower(), "gray")


def render_cell(column: ColumnDescriptor, value: Any) -> Cell:
    """Turn a resolved value into a cell.

    A custom renderer wins; otherwise the column hints apply in order:
    status badge, empty placeholder, number, icon, raw value. Status badges
    render even for a missing value, in the neutral tone.
    """
    if column.renderer is not None:
        rendered = column.renderer(value)
        if isinstance(rendered, Cell):
            return rendered
        return Cell(text="" if rendered is None else str(rendered), icon=column.icon)

    if column.is_status:
        text = "" if value is None else str(value)
        return Cell(text=text, style=CellStyle.BADGE, tone=status_tone(text))

    if value is None or value == "":
        return Cell(text=column.empty_placeholder, style=CellStyle.EMPTY)

    if column.is_number:
        return Cell(text=format_number(value), style=CellStyle.NUMBER)

    if column.icon:
        return Cell(text=str(value), style=CellStyle.ICON, icon=column.icon)

    return Cell(text=str(value))


def coerce_field_value(field: FormField, raw: Any) -> Any:
    """Convert a submitted form value to the type its input kind implies."""
    if field.kind == FieldKind.CHECKBOX:
        if isinstance(raw, bool):
            return raw
        return raw is not None and str(raw).strip().lower() in TRUTHY_FORM_VALUES

    if field.kind == FieldKind.NUMBER:
        if raw is None or raw == "":
            return None
        if isinstance(raw, (int, float)):
            return raw
        text = str(raw).strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return text

    if field.kind == FieldKind.FILE:
        # uploads travel as their file name
        return getattr(raw, "filename", raw)

    return raw


class DataTable:
    """Searchable, paginated table with add/edit dialogs.

    One instance holds the state of a single table view: the search term, the
    current page, the open dialog and its draft.
    """

    def __init__(
        self,
        columns: List[ColumnDescriptor],
        records: List[Dict[str, Any]],
        on_add: Optional[RecordCallback] = None,
        on_update: Optional[RecordCallback] = None,
        on_delete: Optional[RecordCallback] = None,
        on_row_click: Optional[RowLink] = None,
        form_fields: Optional[List[FormField]] = None,
        page_size: Optional[int] = None,
        loading: bool = False,
        id_field: str = "id",
    ):
        self.columns = columns
        self.records = list(records or [])
        self.on_add = on_add
        self.on_update = on_update
        self.on_delete = on_delete
        self.on_row_click = on_row_click
        self._form_fields = form_fields
        self.page_size = page_size or settings.TABLE_PAGE_SIZE
        self.loading = loading
        self.id_field = id_field

        self.search_term = ""
        self.page = 1
        self.dialog_mode: Optional[DialogMode] = None
        self.draft: Dict[str, Any] = {}
        self.missing_fields: List[str] = []

    # -- fields -----------------------------------------------------------

    @property
    def form_fields(self) -> List[FormField]:
        """Explicit form fields, or one text input per column."""
        if self._form_fields:
            return self._form_fields
        return [
            FormField(key=column.field_path, label=column.label)
            for column in self.columns
        ]

    def record_id(self, record: Dict[str, Any]) -> Optional[str]:
        value = get_field_value(record, self.id_field)
        return None if value is None else str(value)

    # -- search & pagination ----------------------------------------------

    def matches(self, record: Dict[str, Any], term: str) -> bool:
        """True when any displayed column's value contains the term."""
        if not term:
            return True
        needle = term.lower()
        for column in self.columns:
            value = resolve_value(record, column)
            if value is not None and needle in str(value).lower():
                return True
        return False

    @property
    def filtered_records(self) -> List[Dict[str, Any]]:
        return [r for r in self.records if self.matches(r, self.search_term)]

    @property
    def page_count(self) -> int:
        return math.ceil(len(self.filtered_records) / self.page_size)

    def set_search(self, term: Optional[str]) -> None:
        term = term or ""
        if term != self.search_term:
            self.search_term = term
            self.page = 1

    def go_to_page(self, page: int) -> int:
        self.page = max(1, min(page, max(self.page_count, 1)))
        return self.page

    def first_page(self) -> int:
        return self.go_to_page(1)

    def previous_page(self) -> int:
        return self.go_to_page(self.page - 1)

    def next_page(self) -> int:
        return self.go_to_page(self.page + 1)

    def last_page(self) -> int:
        return self.go_to_page(self.page_count)

    @property
    def visible_records(self) -> List[Dict[str, Any]]:
        start = (self.page - 1) * self.page_size
        return self.filtered_records[start:start + self.page_size]

    # -- dialogs ----------------------------------------------------------

    def open_add(self) -> None:
        self.dialog_mode = DialogMode.ADD
        self.draft = {}
        self.missing_fields = []

    def open_edit(self, record: Dict[str, Any]) -> None:
        self.dialog_mode = DialogMode.EDIT
        self.draft = copy.deepcopy(record)
        self.missing_fields = []

    def close_dialog(self) -> None:
        self.dialog_mode = None
        self.draft = {}
        self.missing_fields = []

    def update_draft(self, values: Mapping[str, Any]) -> None:
        """Merge individual field values into the draft."""
        fields = {field.key: field for field in self.form_fields}
        for key, raw in values.items():
            field = fields.get(key)
            value = coerce_field_value(field, raw) if field else raw
            set_field_value(self.draft, key, value)

    def apply_form(self, form: Mapping[str, Any]) -> None:
        """Load a whole submitted form into the draft.

        Unchecked checkboxes are absent from an HTML form post and read as False.
        """
        for field in self.form_fields:
            if field.kind == FieldKind.CHECKBOX:
                set_field_value(self.draft, field.key, coerce_field_value(field, form.get(field.key)))
            elif field.key in form:
                set_field_value(self.draft, field.key, coerce_field_value(field, form[field.key]))

    def _missing_required(self) -> List[str]:
        missing = []
        for field in self.form_fields:
            if not field.required or field.kind == FieldKind.CHECKBOX:
                continue
            value = get_field_value(self.draft, field.key)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(field.key)
        return missing

    async def _submit(self, mode: DialogMode, callback: Optional[RecordCallback]) -> bool:
        if self.loading or self.dialog_mode != mode or callback is None:
            return False

        self.missing_fields = self._missing_required()
        if self.missing_fields:
            return False

        try:
            await callback(self.draft)
        except Exception as e:
            logger.warning(f"{mode.value} callback failed, keeping dialog open: {e}")
            return False

        self.close_dialog()
        return True

    async def submit_add(self) -> bool:
        """Hand the draft to the add callback; close the dialog if it succeeds."""
        return await self._submit(DialogMode.ADD, self.on_add)

    async def submit_update(self) -> bool:
        """Hand the edited record to the update callback; close if it succeeds."""
        return await self._submit(DialogMode.EDIT, self.on_update)

    async def delete(self, record: Dict[str, Any]) -> bool:
        if self.loading or self.on_delete is None:
            return False
        try:
            await self.on_delete(record)
        except Exception as e:
            logger.warning(f"delete callback failed for {self.record_id(record)}: {e}")
            return False
        return True

    def click_row(self, record: Dict[str, Any]) -> Optional[str]:
        if self.on_row_click is None:
            return None
        return self.on_row_click(record)

    # -- view -------------------------------------------------------------

    def _dialog_view(self) -> Optional[DialogView]:
        if self.dialog_mode is None:
            return None
        is_add = self.dialog_mode == DialogMode.ADD
        values = {
            field.key: get_field_value(self.draft, field.key)
            for field in self.form_fields
        }
        return DialogView(
            mode=self.dialog_mode,
            title="Add New Record" if is_add else "Edit Record",
            submit_label="Add Record" if is_add else "Save Changes",
            fields=self.form_fields,
            values=values,
            record_id=None if is_add else self.record_id(self.draft),
            missing=self.missing_fields,
        )

    def view(self) -> TableView:
        headers = [column.label for column in self.columns]
        base = dict(
            headers=headers,
            search_term=self.search_term,
            page_size=self.page_size,
            total_records=len(self.records),
            loading=self.loading,
            can_add=self.on_add is not None and not self.loading,
            can_edit=self.on_update is not None and not self.loading,
        )

        if self.loading:
            return TableView(**base, empty_message=LOADING_MESSAGE)

        filtered = self.filtered_records
        self.go_to_page(self.page)
        rows = [
            TableRow(
                record_id=self.record_id(record),
                cells=[render_cell(c, resolve_value(record, c)) for c in self.columns],
                href=self.click_row(record),
            )
            for record in self.visible_records
        ]

        empty_message = None
        if not self.records:
            empty_message = NO_DATA_MESSAGE
        elif not filtered:
            empty_message = NO_RESULTS_MESSAGE

        return TableView(
            **base,
            rows=rows,
            page=self.page,
            page_count=self.page_count,
            filtered_records=len(filtered),
            empty_message=empty_message,
            dialog=self._dialog_view(),
        )
