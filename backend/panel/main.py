import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from panel.core.config import Settings, get_settings
from panel.core.exceptions import register_exception_handlers
from panel.core.init_db import init_db
from panel.core.limiter import limiter, rate_limit_exceeded_handler
from panel.core.logging import configure_logging
from panel.core.middleware import RequestLoggingMiddleware
from panel.modules.api_keys.router import router as api_key_router
from panel.modules.auth.router import router as auth_router
from panel.modules.backups.router import router as backup_router
from panel.modules.databases.router import router as db_router
from panel.modules.dns.router import router as dns_router
from panel.modules.domains.router import router as domain_router
from panel.modules.email_accounts.router import router as email_router
from panel.modules.files.router import router as files_router
from panel.modules.knowledge_base.router import router as kb_router
from panel.modules.notifications.router import router as notification_router
from panel.modules.notifications.router import ws_router as notification_ws_router
from panel.modules.packages.router import router as package_router
from panel.modules.projects.router import router as project_router
from panel.modules.recommendations.router import router as recommendation_router
from panel.modules.security.router import router as security_router
from panel.modules.server_stats.router import router as stats_router
from panel.modules.ssl.router import router as ssl_router
from panel.modules.users.router import router as user_router
from panel.modules.webmail.router import router as webmail_router
from panel.modules.widgets.router import router as widget_router
from panel.storage.base import Storage
from panel.storage.factory import build_storage
from panel.system.notifier import NotificationHub
from panel.system.scheduler import PanelScheduler

logger = logging.getLogger(__name__)

ROUTERS = [
    auth_router,
    user_router,
    package_router,
    domain_router,
    dns_router,
    ssl_router,
    email_router,
    db_router,
    files_router,
    stats_router,
    notification_router,
    notification_ws_router,
    backup_router,
    api_key_router,
    widget_router,
    security_router,
    webmail_router,
    project_router,
    kb_router,
    recommendation_router,
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1. CREATE SUPERUSER + PACKAGE DEFAULT
    init_db(app.state.storage, app.state.settings)

    # 2. START SCHEDULER
    if app.state.settings.scheduler_enabled:
        app.state.scheduler.start()

    yield

    app.state.scheduler.shutdown()


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Baseless Panel API", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.storage = storage or build_storage(settings)
    app.state.hub = NotificationHub()
    app.state.scheduler = PanelScheduler(app.state.storage, app.state.hub, settings)

    # --- Rate limit ---
    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,  # Jangan pernah pakai ["*"] di production
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    # --- Register Router ---
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/")
    def read_root():
        return {"message": "Baseless Panel API is Ready!"}

    @app.get("/health")
    def health():
        return {"status": "ok", "storage": type(app.state.storage).__name__}

    return app


app = create_app()
