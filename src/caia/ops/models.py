"""Data models for instructions embedded in model responses."""

import json
from enum import Enum
from pathlib import PurePath
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xls"})


class Verb(str, Enum):
    """Supported instruction verbs."""

    CREATE = "create"
    EDIT = "edit"
    READ = "read"


class SheetActionType(str, Enum):
    """Supported spreadsheet action kinds."""

    CREATE_SHEET = "create_sheet"
    SET_CELL = "set_cell"
    ADD_ROW = "add_row"
    READ_SHEET = "read_sheet"


def is_spreadsheet_path(filename: str) -> bool:
    """True when the extension marks ``filename`` as a spreadsheet document."""
    return PurePath(filename).suffix.lower() in SPREADSHEET_EXTENSIONS


class SheetOperation(BaseModel):
    """One step of a spreadsheet instruction."""

    model_config = ConfigDict(populate_by_name=True)

    kind: str = Field(default="", alias="type")
    sheet: str = ""
    cell: str = ""  # A1 notation, set_cell only
    value: Optional[Union[StrictBool, int, float, str]] = None  # set_cell only
    row: list[str] = Field(default_factory=list)  # add_row only

    @field_validator("kind", "sheet", "cell", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("row", mode="before")
    @classmethod
    def _scalars_as_text(cls, value: Any) -> Any:
        if value is None:
            return []
        # Numbers and booleans are typed again per token at execution time
        if isinstance(value, list):
            return [
                item if isinstance(item, str) else "" if item is None else json.dumps(item)
                for item in value
            ]
        return value


class Instruction(BaseModel):
    """A unit of file or spreadsheet work requested by the model."""

    operation: str = ""
    filename: str = ""
    content: str = ""  # escaped-newline encoded, plain files only
    actions: list[SheetOperation] = Field(default_factory=list)  # spreadsheets only

    # JSON null reads as the empty value, like a missing key
    @field_validator("operation", "filename", "content", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("actions", mode="before")
    @classmethod
    def _null_actions(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def verb(self) -> Optional[Verb]:
        try:
            return Verb(self.operation)
        except ValueError:
            return None

    @property
    def is_spreadsheet(self) -> bool:
        return is_spreadsheet_path(self.filename)

    @property
    def is_read(self) -> bool:
        return self.verb is Verb.READ


class ExecutionResult(BaseModel):
    """Outcome of executing one instruction."""

    success: bool
    operation: str
    filename: str
    message: str = ""
    cancelled: bool = False
    errors: list[str] = Field(default_factory=list)
    content: Optional[str] = None  # plain-file reads
    rows: dict[str, list[list[Any]]] = Field(default_factory=dict)  # spreadsheet reads
