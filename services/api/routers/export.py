"""
Export API Routes
Generate schema code from the current model.
"""
from fastapi import APIRouter, Depends, HTTPException

from core.exporter import ExportFormat, export_schema
from core.schema_store import SchemaStore
from services.api.schemas import ExportResponse
from services.api.store import get_store

router = APIRouter(prefix="/export", tags=["Export"])


@router.get("/{fmt}", response_model=ExportResponse)
async def export_code(fmt: str, store: SchemaStore = Depends(get_store)):
    """
    Generate code in the requested format (SQL, Drizzle, Spring or Prisma).

    The code starts with a two-line "generated by" comment header.
    """
    try:
        export_format = ExportFormat.parse(fmt)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    tables = store.all()
    if not tables:
        raise HTTPException(
            status_code=400,
            detail="Create at least one table before exporting",
        )

    return ExportResponse(
        format=export_format.value,
        code=export_schema(tables, export_format),
    )
