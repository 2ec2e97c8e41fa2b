"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import asyncio

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from pydantic import BaseModel

from sellerdesk import __version__
from sellerdesk.config.settings import get_settings
from sellerdesk.imgproc.errors import ErrorKind, PhotoUploadError
from sellerdesk.imgproc.models import RawSelection
from sellerdesk.imgproc.normalize import ImageNormalizer

ERROR_STATUS = {
    ErrorKind.INVALID_FILE_TYPE: 415,
    ErrorKind.FILE_TOO_LARGE: 413,
    ErrorKind.DECODE_ERROR: 422,
}


class NormalizedImageResponse(BaseModel):
    """Normalised photo ready to be attached to a product."""

    data_uri: str
    width: int
    height: int
    approx_size_bytes: int
    quality_used: float


def create_app(normalizer: ImageNormalizer | None = None) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = get_settings()
    normalizer = normalizer or ImageNormalizer()
    app = FastAPI(
        title="Seller Desk API",
        version=__version__,
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
    )
    app.mount("/metrics", make_asgi_app())

    @app.exception_handler(PhotoUploadError)
    async def photo_upload_error_handler(request: Request, exc: PhotoUploadError) -> JSONResponse:
        return JSONResponse(
            status_code=ERROR_STATUS.get(exc.kind, 400),
            content={"error": exc.kind.value, "message": exc.message},
        )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.post("/images/normalize", tags=["images"], response_model=NormalizedImageResponse)
    async def normalize_image(file: UploadFile = File(...)) -> NormalizedImageResponse:
        """Resize and re-encode an uploaded product photo."""

        data = await file.read()
        selection = RawSelection(
            data=data,
            mime_type=file.content_type or "",
            size_bytes=file.size if file.size is not None else len(data),
        )
        image = await asyncio.to_thread(normalizer.normalize, selection)
        return NormalizedImageResponse(
            data_uri=image.to_data_uri(),
            width=image.width,
            height=image.height,
            approx_size_bytes=image.approx_size_bytes,
            quality_used=image.quality_used,
        )

    return app


app = create_app()
