import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, UploadFile, File, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from .errors import make_error
from .log import setup_logger
from .models import CsvOptions, FormatRequest, HealthResponse, RecordsResponse, RowsResponse
from .normalize import decode_text, format_records, parse_table, rows_to_records
from .rules import DEFAULT_DELIMITER, UPLOAD_SUFFIXES

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger()
    yield


app = FastAPI(
    title="ff",
    description="Delimited-text parsing and formatting for automation pipelines",
    version="0.1.0",
    lifespan=lifespan,
)


def _options(delimiter: str, has_header: bool = True) -> CsvOptions:
    try:
        return CsvOptions(delimiter=delimiter, has_header=has_header)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=make_error(exc).model_dump(mode="json")) from exc


async def _read_upload(file: UploadFile) -> str:
    if not (file.filename or "").lower().endswith(UPLOAD_SUFFIXES):
        logger.info("rejected upload %r", file.filename)
        raise HTTPException(status_code=422, detail="Only CSV/TSV files are supported")
    return decode_text(await file.read())


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/csv/rows", response_model=RowsResponse)
async def csv_rows(
    file: UploadFile = File(...),
    has_header: bool = Query(True),
    delimiter: str = Query(DEFAULT_DELIMITER),
):
    options = _options(delimiter, has_header)
    table = parse_table(await _read_upload(file), options.delimiter)
    if options.has_header and table:
        return {"header": table[0], "rows": table[1:]}
    return {"header": None, "rows": table}


@app.post("/csv/records", response_model=RecordsResponse)
async def csv_records(
    file: UploadFile = File(...),
    delimiter: str = Query(DEFAULT_DELIMITER),
):
    options = _options(delimiter)
    table = parse_table(await _read_upload(file), options.delimiter)
    if not table:
        return {"header": [], "records": []}
    return {"header": table[0], "records": rows_to_records(table[0], table[1:])}


@app.post("/csv/format", response_class=PlainTextResponse)
def csv_format(request: FormatRequest):
    return PlainTextResponse(
        format_records(request.records, request.delimiter),
        media_type="text/csv",
    )
