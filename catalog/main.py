# catalog/main.py
import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import CatalogStore, ProductNotFound, StorageError, ValidationFailed
from .sdk import (
    MalformedRequest, create_product_logic, delete_product_logic,
    get_product_logic, list_categories_logic, list_products_logic,
    update_product_logic,
)
from .static_files import content_type_for, resolve_static_path

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="fabula-catalog")

API_PREFIXES = ("/api/products", "/api/categories")
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
NOT_FOUND_BODY = "404 Not Found"


def not_found() -> PlainTextResponse:
    return PlainTextResponse(NOT_FOUND_BODY, status_code=status.HTTP_404_NOT_FOUND)


# ---------------------------
# CORS for the API (every response, preflight answered with 204)
# ---------------------------
@app.middleware("http")
async def api_cors(request: Request, call_next):
    if not request.url.path.startswith(API_PREFIXES):
        return await call_next(request)
    if request.method == "OPTIONS":
        response = Response(status_code=status.HTTP_204_NO_CONTENT)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


# ---------------------------
# Error mapping
# ---------------------------
@app.exception_handler(ProductNotFound)
async def product_not_found_handler(request: Request, exc: ProductNotFound):
    return not_found()

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # unknown routes and unsupported methods look like a missing product
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return not_found()
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

@app.exception_handler(MalformedRequest)
@app.exception_handler(ValidationFailed)
async def bad_request_handler(request: Request, exc: Exception):
    return JSONResponse({"error": str(exc)}, status_code=status.HTTP_400_BAD_REQUEST)

@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return JSONResponse(
        {"error": "Internal Server Error"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def get_catalog(settings: Settings = Depends(get_settings)) -> CatalogStore:
    return CatalogStore(settings.data_file, settings.images_dir)


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products")
async def list_products(store: CatalogStore = Depends(get_catalog)):
    return await list_products_logic(store)

@app.get("/api/products/{product_id}")
async def get_product(product_id: str, store: CatalogStore = Depends(get_catalog)):
    return await get_product_logic(store, product_id)

@app.post("/api/products", status_code=status.HTTP_201_CREATED)
async def create_product(request: Request, store: CatalogStore = Depends(get_catalog)):
    return await create_product_logic(store, request)

@app.put("/api/products/{product_id}")
async def update_product(product_id: str, request: Request, store: CatalogStore = Depends(get_catalog)):
    return await update_product_logic(store, product_id, request)

@app.delete("/api/products/{product_id}")
async def delete_product(product_id: str, store: CatalogStore = Depends(get_catalog)):
    return await delete_product_logic(store, product_id)

@app.get("/api/categories")
async def list_categories(store: CatalogStore = Depends(get_catalog)):
    return await list_categories_logic(store)


# ---------------------------
# Static site (registered last so the API routes match first)
# ---------------------------
@app.get("/{file_path:path}", include_in_schema=False)
async def static_file(file_path: str, settings: Settings = Depends(get_settings)):
    resolved = resolve_static_path(settings.PUBLIC_DIR, file_path)
    if resolved is None:
        return not_found()
    return FileResponse(resolved, media_type=content_type_for(resolved))


if __name__ == "__main__":
    import uvicorn

    logger.info("Catalog server is running at http://localhost:%s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
