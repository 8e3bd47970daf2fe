# notehub/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Your configuration and DB
from notehub.config import settings
from notehub.core.db import init_db, close_db
from notehub.core.errors import register_error_handlers
from notehub.core.upload_limit import UploadSizeLimitMiddleware
from notehub.core.bootstrap import report_blob_store
from notehub.services.blob_factory import get_blob_store

from notehub.api.routers import accounts, channels, notes, storage

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Reject oversized uploads before the multipart body is parsed
app.add_middleware(UploadSizeLimitMiddleware, max_bytes=settings.max_upload_bytes)

register_error_handlers(app)


@app.on_event("startup")
async def on_startup():
    await init_db(generate_schemas=settings.db_generate_schemas)
    report_blob_store(get_blob_store())


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


# REST
app.include_router(accounts.router)
app.include_router(channels.router)
app.include_router(notes.router)
app.include_router(storage.router)


@app.get("/healthz")
def healthz():
    return {"ok": True}
