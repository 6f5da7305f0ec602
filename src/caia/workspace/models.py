"""Data models for the workspace index."""

from datetime import datetime

from pydantic import BaseModel, Field


class WorkspaceFileDescriptor(BaseModel):
    """Metadata for one entry of the workspace."""

    path: str
    name: str
    size: int
    mod_time: datetime
    is_dir: bool = False
    language: str = ""
    sheet_names: list[str] = Field(default_factory=list)
    row_count: dict[str, int] = Field(default_factory=dict)

    @property
    def is_spreadsheet(self) -> bool:
        return self.language == "Excel"
