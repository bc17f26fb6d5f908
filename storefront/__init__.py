from contextlib import asynccontextmanager
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import Config, Settings
from .core.locks import LockRegistry
from .core.logging import configure_logging
from .db.memory_store import InMemoryStore
from .db.store import Store
from .enums import ErrorKind
from .exceptions import (
    create_exception_handler,
    EmptyCartException,
    InvalidDiscountCodeException,
    NotFoundException,
    ValidationException,
)
from .routers.admin import router as admin_router
from .routers.cart import router as cart_router
from .routers.orders import router as orders_router
from .routers.products import router as products_router
from .schemas import Product
from .services import ProductService

load_dotenv()


async def request_validation_handler(request: Request, exception: RequestValidationError):
    return JSONResponse(
        content={"detail": jsonable_encoder(exception.errors()), "kind": ErrorKind.VALIDATION_ERROR.value},
        status_code=status.HTTP_400_BAD_REQUEST
    )


def _build_sql_store(settings: Settings):
    from .db.database import create_engine, create_session_factory, init_db
    from .db.sql_store import SqlStore

    engine = create_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db(engine)
        yield
        await engine.dispose()

    return SqlStore(create_session_factory(engine)), lifespan


def create_app(
    store: Optional[Store] = None,
    settings: Settings = Config,
    products: Optional[List[Product]] = None,
) -> FastAPI:
    """
    Build the API around one store.

    Without an explicit ``store`` the app uses SQL storage when DATABASE_URL
    is set and an in-memory store otherwise.
    """
    configure_logging(settings.LOG_LEVEL)

    lifespan = None
    if store is None:
        if settings.DATABASE_URL:
            store, lifespan = _build_sql_store(settings)
        else:
            store = InMemoryStore()

    api_version = settings.API_VERSION
    app = FastAPI(
        docs_url=f"/api/{api_version}/docs",
        redoc_url=f"/api/{api_version}/redoc",
        openapi_url=f"/api/{api_version}/openapi.json",
        title="Storefront API",
        description="Cart, checkout and Nth-order discount codes for a small demo shop.",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.locks = LockRegistry()
    app.state.products = ProductService(products)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['GET', 'POST', 'DELETE'],
        allow_headers=["*"],
    )

    # Register endpoints
    app.include_router(products_router, prefix=f'/api/{api_version}/products', tags=["Products"])
    app.include_router(cart_router, prefix=f'/api/{api_version}/cart', tags=["Cart"])
    app.include_router(orders_router, prefix=f'/api/{api_version}', tags=["Orders"])
    app.include_router(admin_router, prefix=f'/api/{api_version}/admin', tags=["Admin"])

    @app.get("/")
    async def root():
        return {
            "message": "Storefront API",
            "version": "1.0.0",
            "docs": f"/api/{api_version}/docs",
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    # Register custom exceptions
    app.add_exception_handler(ValidationException, create_exception_handler(400))
    app.add_exception_handler(EmptyCartException, create_exception_handler(400))
    app.add_exception_handler(InvalidDiscountCodeException, create_exception_handler(400))
    app.add_exception_handler(NotFoundException, create_exception_handler(404))
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    return app


app = create_app()
