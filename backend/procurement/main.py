import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from procurement.config import Settings
from procurement.core.exceptions import register_exception_handlers
from procurement.core.log_config import configure_logging
from procurement.core.responses import success_response
from procurement.database import Base, build_engine, build_session_factory

# Import all models so Base.metadata knows about them
import procurement.auth.models  # noqa: F401
import procurement.corporations.models  # noqa: F401
import procurement.charges.models  # noqa: F401
import procurement.sales_taxes.models  # noqa: F401
import procurement.uom.models  # noqa: F401
import procurement.freight.models  # noqa: F401
import procurement.po_instructions.models  # noqa: F401
import procurement.terms.models  # noqa: F401
import procurement.service_types.models  # noqa: F401
import procurement.locations.models  # noqa: F401
import procurement.projects.models  # noqa: F401
import procurement.cost_codes.models  # noqa: F401
import procurement.audit.models  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    settings = application.state.settings

    if settings.is_sqlite:
        db_path = settings.database_url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    engine = build_engine(settings.database_url)

    # Auto-create tables for SQLite in development
    if settings.is_sqlite:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    application.state.engine = engine
    application.state.session_factory = build_session_factory(engine)
    logger.info("Database ready")

    yield

    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level, settings.log_json)

    fastapi_app = FastAPI(
        title="Procurement",
        description="Purchasing master data: charges, taxes, freight, cost codes and project item types",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.settings = settings

    # CORS
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    from procurement.audit.router import router as audit_router
    from procurement.auth.router import router as auth_router
    from procurement.charges.router import router as charges_router
    from procurement.corporations.router import router as corporations_router
    from procurement.cost_codes.division_router import router as divisions_router
    from procurement.cost_codes.router import router as cost_codes_router
    from procurement.freight.router import router as ship_via_router
    from procurement.locations.router import router as locations_router
    from procurement.po_instructions.router import router as po_instructions_router
    from procurement.projects.item_type_router import router as item_types_router
    from procurement.projects.router import router as projects_router
    from procurement.projects.type_router import router as project_types_router
    from procurement.sales_taxes.router import router as sales_taxes_router
    from procurement.service_types.router import router as service_types_router
    from procurement.terms.router import router as terms_router
    from procurement.uom.router import router as uom_router

    fastapi_app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    fastapi_app.include_router(corporations_router, prefix="/api/corporations", tags=["corporations"])
    fastapi_app.include_router(charges_router, prefix="/api/charges", tags=["charges"])
    fastapi_app.include_router(sales_taxes_router, prefix="/api/sales-taxes", tags=["sales-taxes"])
    fastapi_app.include_router(uom_router, prefix="/api/uom", tags=["uom"])
    fastapi_app.include_router(ship_via_router, prefix="/api/ship-via", tags=["ship-via"])
    fastapi_app.include_router(po_instructions_router, prefix="/api/po-instructions", tags=["po-instructions"])
    fastapi_app.include_router(terms_router, prefix="/api/terms-and-conditions", tags=["terms-and-conditions"])
    fastapi_app.include_router(project_types_router, prefix="/api/project-types", tags=["project-types"])
    fastapi_app.include_router(service_types_router, prefix="/api/service-types", tags=["service-types"])
    fastapi_app.include_router(locations_router, prefix="/api/locations", tags=["locations"])
    fastapi_app.include_router(divisions_router, prefix="/api/cost-code-divisions", tags=["cost-codes"])
    fastapi_app.include_router(cost_codes_router, prefix="/api/cost-code-configurations", tags=["cost-codes"])
    fastapi_app.include_router(projects_router, prefix="/api/projects", tags=["projects"])
    fastapi_app.include_router(item_types_router, prefix="/api/item-types", tags=["item-types"])
    fastapi_app.include_router(audit_router, prefix="/api/audit-logs", tags=["audit-logs"])

    # System endpoints
    @fastapi_app.get("/api/system/health")
    async def health():
        return success_response({"status": "healthy"})

    # Register exception handlers
    register_exception_handlers(fastapi_app)

    return fastapi_app


app = create_app()
