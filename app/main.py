from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.academic_years.router import router as academic_years_router
from app.api.v1.auth.router import router as auth_router
from app.api.v1.backup.router import router as backup_router
from app.api.v1.cases.router import router as cases_router
from app.api.v1.dismissals.router import router as dismissals_router
from app.api.v1.exit_permissions.router import router as exit_permissions_router
from app.api.v1.reports.router import router as reports_router
from app.api.v1.sms_logs.router import router as sms_logs_router
from app.api.v1.students.router import router as students_router
from app.api.v1.users.router import router as users_router
from app.core.config import settings
from app.core.context import AppContext
from app.core.logging import setup_logging
from app.core.store import PersistentStore
from app.db.session import AsyncSessionLocal, create_tables
from app.notifications.dispatcher import NotificationDispatcher
from app.notifications.gateway import build_gateway


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    dispatcher = NotificationDispatcher(build_gateway(settings))
    app.state.context = await AppContext.load(PersistentStore(AsyncSessionLocal), dispatcher)
    yield
    await dispatcher.drain()


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="School Discipline Management", lifespan=lifespan)

    # CORS: allow the dashboard frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(academic_years_router)
    app.include_router(students_router)
    app.include_router(cases_router)
    app.include_router(dismissals_router)
    app.include_router(exit_permissions_router)
    app.include_router(sms_logs_router)
    app.include_router(reports_router)
    app.include_router(backup_router)

    return app


app = create_app()
