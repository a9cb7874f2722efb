from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi import Request
import os # for .env files
from dotenv import load_dotenv #for .env files
import logging
import uvicorn
from fastapi.responses import JSONResponse
from api import jobs, imports, metrics # importing routers
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from db import engine, init_db, DB_PATH
from templating import BASE_DIR

load_dotenv()

SERVICE_NAME = "job-tracker"

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one engine for the whole process: tables at startup, pool closed at shutdown
    init_db()
    logger.info(f"Database: {DB_PATH}")
    yield
    engine.dispose()


app = FastAPI(title="Job Application Tracker", lifespan=lifespan)

app.mount('/static', StaticFiles(directory=str(BASE_DIR / "static")), name='static')


@app.exception_handler(Exception)
async def global_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occured"}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f'Validation Error: {exc}')
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError):
    # ctx may carry exception objects that JSONResponse can't encode
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


@app.get("/health")
def health():
    return {"status": "ok", "service": SERVICE_NAME}


#Include routers from separate modules.
app.include_router(jobs.router)
app.include_router(imports.router)
app.include_router(metrics.router)


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    host = os.environ.get("HOST", "0.0.0.0")
    logger.info(f"Server starting on port {port}")
    uvicorn.run("main:app", host=host, port=port)
