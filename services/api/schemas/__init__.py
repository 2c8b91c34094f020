"""Pydantic schemas for API request/response models."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from core.ddl_parser import SkippedFragment
from models.schema import Column, Table

__all__ = [
    'ReferenceModel',
    'ColumnModel',
    'TableDraft',
    'TableResponse',
    'ImportRequest',
    'SkippedFragmentResponse',
    'ImportResponse',
    'ExportResponse',
    'HealthResponse',
]


class ReferenceModel(BaseModel):
    """Foreign-key target; both fields empty when unset."""
    tableId: str = ""
    columnName: str = ""


class ColumnModel(BaseModel):
    """Column in the editor's wire shape."""
    name: str
    type: str
    typeLength: Optional[int] = None
    nullable: bool = True
    unique: bool = False
    primaryKey: bool = False
    foreignKey: bool = False
    references: ReferenceModel = Field(default_factory=ReferenceModel)

    @field_validator("typeLength", mode="before")
    @classmethod
    def blank_length_is_none(cls, value):
        """The editor sends an empty string when no length is set."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_column(self) -> Column:
        return Column.from_dict(self.model_dump())


class TableDraft(BaseModel):
    """Request body for creating or replacing a table."""
    name: str
    notes: str = ""
    columns: List[ColumnModel] = Field(default_factory=list)
    primaryKey: Optional[str] = None

    def to_columns(self) -> List[Column]:
        return [c.to_column() for c in self.columns]


class TableResponse(BaseModel):
    """A committed table."""
    id: str
    name: str
    notes: str
    columns: List[ColumnModel]
    primaryKey: Optional[str] = None

    @classmethod
    def from_table(cls, table: Table) -> "TableResponse":
        return cls.model_validate(table.to_dict())


class ImportRequest(BaseModel):
    """Raw DDL text to bulk-import."""
    ddl: str


class SkippedFragmentResponse(BaseModel):
    kind: str
    text: str
    reason: str

    @classmethod
    def from_fragment(cls, frag: SkippedFragment) -> "SkippedFragmentResponse":
        return cls(kind=frag.kind, text=frag.text, reason=frag.reason)


class ImportResponse(BaseModel):
    """Tables added by an import plus the input that was dropped."""
    tables: List[TableResponse]
    skipped: List[SkippedFragmentResponse]


class ExportResponse(BaseModel):
    """Generated schema code."""
    format: str
    code: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime
    tables: int
