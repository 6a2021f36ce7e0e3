import logging
import time

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .database import Base, build_engine, build_session_factory, check_connection
from .exceptions import register_exception_handlers
from .logging_config import setup_logging
from .odds_feed import SAMPLE_ODDS, OddsFeed

# Routers
from .services.auth import router as auth_router
from .services.wallet import router as wallet_router
from .services.deposit import router as deposit_router
from .services.payment import router as payment_router
from .services.sportsbook import router as sportsbook_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    """Construye la app. Todo el estado vive en ``app.state``.

    Para uvicorn: ``uvicorn fastmoney.main:create_app --factory``
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    if settings.secret_key == "change_me":
        logger.warning("JWT_SECRET no configurado; usando la clave por defecto")

    app = FastAPI(
        title=settings.project_name,
        description="Backend de FastMoney.games: billetera, depósitos manuales y cuotas",
        version=settings.api_version,
    )

    engine = build_engine(settings)
    scheduler = AsyncIOScheduler()

    app.state.settings = settings
    app.state.engine = engine
    app.state.SessionLocal = build_session_factory(engine)
    app.state.scheduler = scheduler
    app.state.odds_feed = OddsFeed(scheduler, SAMPLE_ODDS, settings.odds_push_interval)

    # ------------------------
    # CORS
    # ------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------
    # Log de peticiones
    # ------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %s %.1f ms", request.method, request.url.path,
                    response.status_code, elapsed_ms)
        return response

    register_exception_handlers(app)

    # ------------------------
    # STARTUP / SHUTDOWN
    # ------------------------
    @app.on_event("startup")
    async def startup_event():
        logger.info("🚀 Iniciando aplicación...")
        # Sin base de datos no se sirve nada: la excepción aborta el arranque
        check_connection(engine)
        Base.metadata.create_all(bind=engine)
        scheduler.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        scheduler.shutdown(wait=False)
        engine.dispose()

    # ------------------------
    # Rutas
    # ------------------------
    @app.get("/")
    def root():
        return {"status": "ok"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(wallet_router, prefix="/api/wallet", tags=["Wallet"])
    app.include_router(deposit_router, prefix="/api/deposit", tags=["Deposits"])
    app.include_router(payment_router, prefix="/api/payment", tags=["Payment"])
    app.include_router(sportsbook_router, prefix="/api/sportsbook", tags=["Sportsbook"])

    return app
