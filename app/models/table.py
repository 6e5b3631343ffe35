"""Data models for the generic record table.

Column and form-field descriptors tell the table how to read, display and
edit records without knowing the entity type; the view models are what the
templates render.
"""

from typing import Any, Callable, Dict, List, Optional, Union
from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


FieldAccessor = Callable[[Dict[str, Any]], Any]


class FieldKind(str, Enum):
    """Input kinds available in the add/edit dialogs."""

    TEXT = "text"
    NUMBER = "number"
    URL = "url"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    FILE = "file"


class CellStyle(str, Enum):
    PLAIN = "plain"
    BADGE = "badge"
    NUMBER = "number"
    ICON = "icon"
    EMPTY = "empty"


class Cell(BaseModel):
    """A rendered table cell.

    Attributes:
        text: Text shown in the cell
        style: How the template draws the cell
        tone: Badge colour (green, yellow, red, gray, blue, purple)
        icon: Icon name drawn before the text
        tag: Optional secondary badge, e.g. "Verified"
    """

    text: str = ""
    style: CellStyle = CellStyle.PLAIN
    tone: Optional[str] = None
    icon: Optional[str] = None
    tag: Optional[str] = None


CellRenderer = Callable[[Any], Union[str, Cell]]


class ColumnDescriptor(BaseModel):
    """Declarative description of one table column.

    Attributes:
        label: Column header
        field_path: Dotted path of the value inside a record
        accessor: Function reading the value from a record, overrides field_path
        renderer: Function turning the value into a cell, takes priority over hints
        is_number: Show the value as a locale-formatted number
        is_status: Show the value as a colour-coded status badge
        icon: Icon drawn next to the value
        empty_placeholder: Text shown when the value is missing
    """

    label: Annotated[str, Field(..., description="Column header")]
    field_path: Annotated[str, Field(..., description="Dotted path into the record")]
    accessor: Optional[FieldAccessor] = None
    renderer: Optional[CellRenderer] = None
    is_number: bool = False
    is_status: bool = False
    icon: Optional[str] = None
    empty_placeholder: str = ""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)


class FormField(BaseModel):
    """Declarative description of one input of the add/edit dialog.

    Attributes:
        key: Dotted path the value is written to in the draft
        label: Input label
        kind: Input kind
        options: Choices for select inputs
        required: Whether the dialog refuses to submit without a value
    """

    key: Annotated[str, Field(..., description="Dotted path in the draft")]
    label: Annotated[str, Field(..., description="Input label")]
    kind: FieldKind = FieldKind.TEXT
    options: List[str] = Field(default_factory=list)
    required: bool = False

    model_config = ConfigDict(frozen=True)


class DialogMode(str, Enum):
    ADD = "add"
    EDIT = "edit"


class DialogView(BaseModel):
    """State of an open add/edit dialog as the template sees it."""

    mode: DialogMode
    title: str
    submit_label: str
    fields: List[FormField]
    values: Dict[str, Any] = Field(default_factory=dict)
    record_id: Optional[str] = None
    missing: List[str] = Field(default_factory=list)


class TableRow(BaseModel):
    record_id: Optional[str] = None
    cells: List[Cell]
    href: Optional[str] = None


class TableView(BaseModel):
    """Everything a template needs to draw one page of the table."""

    headers: List[str]
    rows: List[TableRow] = Field(default_factory=list)
    search_term: str = ""
    page: int = 1
    page_count: int = 0
    page_size: int = 25
    total_records: int = 0
    filtered_records: int = 0
    loading: bool = False
    empty_message: Optional[str] = None
    can_add: bool = True
    can_edit: bool = True
    dialog: Optional[DialogView] = None

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count
