# api/imports.py
import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from db import get_db
from services.csv_import import CSVImportError, import_csv
from templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["import"])

MAX_UPLOAD_BYTES = 10 << 20   # 10MB


@router.get("/import-csv", response_class=HTMLResponse)
def import_csv_form(request: Request):
    return templates.TemplateResponse(request, "import_csv.html", {})


@router.post("/process-csv", response_class=HTMLResponse)
def process_csv(
    request: Request,
    csv_file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    content = csv_file.file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="CSV file is too large")

    try:
        result = import_csv(db, content)
    except CSVImportError as exc:
        logger.warning(f"Rejected CSV upload {csv_file.filename!r}: {exc}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    return templates.TemplateResponse(request, "import_result.html", {
        "success_count": result.success_count,
        "error_count": result.error_count,
        "errors": result.errors,
        "total_rows": result.total_rows,
    })
