"""
filestore – FastAPI application entrypoint.

User- and directory-scoped file storage on a Google Cloud Storage bucket:
upload, download, list and delete, with public URLs on storage.googleapis.com.

Run locally:
  uvicorn main:app --host 127.0.0.1 --port 8000 --reload

Environment: see .env.example and filestore.config.Settings.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the directory containing main.py so settings are found
# regardless of current working directory when uvicorn is started.
_APP_DIR = Path(__file__).resolve().parent
load_dotenv(_APP_DIR / ".env")

# Relative key file paths resolve against this directory, not the process cwd.
_key_file = os.environ.get("GCP_KEY_FILE_PATH")
if _key_file and not Path(_key_file).is_absolute():
    os.environ["GCP_KEY_FILE_PATH"] = str((_APP_DIR / _key_file).resolve())

import logging
import sys
from contextlib import asynccontextmanager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
# Uvicorn can override root logging; configure the "filestore" logger explicitly so it always outputs.
_app_logger = logging.getLogger("filestore")
_app_logger.setLevel(logging.INFO)
if not _app_logger.handlers:
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setLevel(logging.INFO)
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    _app_logger.addHandler(_handler)
_app_logger.propagate = False
logger = _app_logger

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from filestore import __version__
from filestore.errors import BucketValidationError
from filestore.routers import files, health
from filestore.services.file_service import get_file_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: build the service (validates config) and wait for the bucket check."""
    service = get_file_service()
    try:
        await service.ready()
    except BucketValidationError as e:
        # Requests will keep failing with 503 until the process is restarted with a valid bucket
        logger.warning("Starting without a usable bucket: %s", e)
    yield


OPENAPI_TAGS = [
    {"name": "Health", "description": "Service health and bucket readiness."},
    {"name": "Files", "description": "Upload, list, download, and delete user files."},
]

app = FastAPI(
    title="filestore",
    description="User- and directory-scoped file storage on Google Cloud Storage.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=OPENAPI_TAGS,
)


@app.get("/", include_in_schema=False)
def _root():
    """Redirect browser visitors to API docs."""
    return RedirectResponse(url="/docs", status_code=302)


app.include_router(files.router)
app.include_router(health.router)
