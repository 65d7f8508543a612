# kasir_api/main.py
import logging
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .core import CategoryIn, ProductIn
from .database import Database, build_database
from .errors import NotFoundError, StoreError, ValidationError
from .logger import setup_logger
from .models import Category, Product
from .services import CategoryService, ProductService

logger = logging.getLogger(__name__)

# ---------------------------
# Service providers
# ---------------------------
def get_category_service(request: Request) -> CategoryService:
    return request.app.state.category_service

def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service

# ---------------------------
# Category endpoints
# ---------------------------
categories_router = APIRouter()

@categories_router.get("", response_model=List[Category])
async def list_categories(svc: CategoryService = Depends(get_category_service)):
    return await svc.get_all()

@categories_router.get("/{category_id}", response_model=Category)
async def get_category(category_id: int, svc: CategoryService = Depends(get_category_service)):
    return await svc.get_by_id(category_id)

@categories_router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryIn, svc: CategoryService = Depends(get_category_service)):
    return await svc.create(payload)

@categories_router.put("/{category_id}", response_model=Category)
async def update_category(category_id: int, payload: CategoryIn, svc: CategoryService = Depends(get_category_service)):
    return await svc.update(category_id, payload)

@categories_router.delete("/{category_id}")
async def delete_category(category_id: int, svc: CategoryService = Depends(get_category_service)):
    await svc.delete(category_id)
    return {"message": "category deleted successfully"}

# ---------------------------
# Product endpoints
# ---------------------------
products_router = APIRouter()

@products_router.get("", response_model=List[Product])
async def list_products(svc: ProductService = Depends(get_product_service)):
    return await svc.get_all()

@products_router.get("/{product_id}", response_model=Product)
async def get_product(product_id: int, svc: ProductService = Depends(get_product_service)):
    return await svc.get_by_id(product_id)

@products_router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductIn, svc: ProductService = Depends(get_product_service)):
    return await svc.create(payload)

@products_router.put("/{product_id}", response_model=Product)
async def update_product(product_id: int, payload: ProductIn, svc: ProductService = Depends(get_product_service)):
    return await svc.update(product_id, payload)

@products_router.delete("/{product_id}")
async def delete_product(product_id: int, svc: ProductService = Depends(get_product_service)):
    await svc.delete(product_id)
    return {"message": "Product deleted successfully"}

# ---------------------------
# Error mapping
# ---------------------------
async def _not_found(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

async def _invalid(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

async def _bad_request(request: Request, exc: RequestValidationError):
    # malformed JSON, wrong field types and non-integer path ids all land here
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "invalid request", "errors": jsonable_encoder(exc.errors())},
    )

async def _store_failed(request: Request, exc: StoreError):
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})

async def _unexpected(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "internal server error"})

# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logger(settings.log_level)
    database = database or build_database(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.database = database
    app.state.category_service = CategoryService(database.categories)
    app.state.product_service = ProductService(database.products, database.categories)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(ValidationError, _invalid)
    app.add_exception_handler(RequestValidationError, _bad_request)
    app.add_exception_handler(StoreError, _store_failed)
    app.add_exception_handler(Exception, _unexpected)

    prefix = settings.api_prefix
    app.include_router(categories_router, prefix=f"{prefix}/categories", tags=["categories"])
    app.include_router(products_router, prefix=f"{prefix}/products", tags=["products"])
    # legacy route names kept for older clients
    app.include_router(categories_router, prefix=f"{prefix}/kategori", tags=["categories"], include_in_schema=False)
    app.include_router(products_router, prefix=f"{prefix}/produk", tags=["products"], include_in_schema=False)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    if settings.enable_reset:
        # Utility: reset (for tests/demo)
        @app.post(f"{prefix}/reset")
        async def reset_all(request: Request):
            await request.app.state.database.clear()
            logger.info("Store reset")
            return {"status": "reset"}

    return app


# Built on demand; serve with `uvicorn kasir_api.main:create_app --factory`.
def run() -> None:
    import uvicorn

    app = create_app()
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
