"""
Table API Routes
Create, replace, delete and bulk-import tables of the designed schema.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from core.schema_store import SchemaStore
from core.validation import validation_errors
from logger import get_logger
from services.api.schemas import (
    ImportRequest,
    ImportResponse,
    SkippedFragmentResponse,
    TableDraft,
    TableResponse,
)
from services.api.store import get_store

logger = get_logger(__name__)

router = APIRouter(prefix="/tables", tags=["Tables"])


@router.get("", response_model=List[TableResponse])
async def list_tables(store: SchemaStore = Depends(get_store)):
    """List all tables in model order."""
    return [TableResponse.from_table(t) for t in store.all()]


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def create_table(draft: TableDraft, store: SchemaStore = Depends(get_store)):
    """
    Create a table.

    Returns 422 with the list of problems when the draft is not persistable.
    """
    columns = draft.to_columns()
    errors = validation_errors(draft.name, columns)
    if errors:
        raise HTTPException(status_code=422, detail=errors)

    table = store.create_table(
        name=draft.name,
        columns=columns,
        notes=draft.notes,
        primary_key=draft.primaryKey,
    )
    logger.info(f"Created table '{table.name}' ({table.id})")
    return TableResponse.from_table(table)


@router.post("/import", response_model=ImportResponse)
async def import_ddl(request: ImportRequest, store: SchemaStore = Depends(get_store)):
    """Parse DDL text and append every recognised table."""
    report = store.import_ddl_report(request.ddl)
    return ImportResponse(
        tables=[TableResponse.from_table(t) for t in report.tables],
        skipped=[SkippedFragmentResponse.from_fragment(f) for f in report.skipped],
    )


@router.get("/{table_id}", response_model=TableResponse)
async def get_table(table_id: str, store: SchemaStore = Depends(get_store)):
    """Get one table by id."""
    table = store.get(table_id)
    if table is None:
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found")
    return TableResponse.from_table(table)


@router.put("/{table_id}", response_model=TableResponse)
async def update_table(
    table_id: str,
    draft: TableDraft,
    store: SchemaStore = Depends(get_store),
):
    """
    Replace a table's name, notes and columns.

    Foreign keys elsewhere that pointed at a removed column are demoted.
    """
    if store.get(table_id) is None:
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found")

    columns = draft.to_columns()
    errors = validation_errors(draft.name, columns)
    if errors:
        raise HTTPException(status_code=422, detail=errors)

    table = store.update_table(
        table_id,
        name=draft.name,
        notes=draft.notes,
        columns=columns,
        primary_key=draft.primaryKey,
    )
    return TableResponse.from_table(table)


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_table(table_id: str, store: SchemaStore = Depends(get_store)):
    """Delete a table; foreign keys pointing into it are demoted."""
    if not store.delete_table(table_id):
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
