import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from barberbook.core.config import Settings, settings
from barberbook.core.exceptions import BookingError, PersistenceFailure
from barberbook.core.scheduler import start_scheduler, stop_scheduler
from barberbook.api.api_v1.api import router as api_router
from barberbook.db.memory import InMemoryRepository
from barberbook.db.mongodb import MongoRepository
from barberbook.services.availability_service import BusinessCalendar
from barberbook.services.notification_service import NotificationService
from barberbook.services.provider_service import seed_providers
from barberbook.services.settings_service import seed_business_settings
from barberbook.services.user_service import seed_admin

logger = logging.getLogger(__name__)

async def open_repository(app_settings: Settings):
    if app_settings.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory storage.")
        return InMemoryRepository()
    return await MongoRepository.connect(app_settings.MONGO_URI, app_settings.DB_NAME)

def create_app(app_settings: Settings = settings) -> FastAPI:
    logging.basicConfig(level=app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.APP_NAME,
        version="1.0.0",
        description="BarberBook booking and queue API"
    )
    app.state.settings = app_settings
    app.state.calendar = BusinessCalendar.from_settings(app_settings)
    app.state.notifications = NotificationService(window_minutes=app_settings.REMINDER_WINDOW_MINUTES)
    app.state.scheduler = None

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(api_router, prefix="/api/v1")

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError):
        if isinstance(exc, PersistenceFailure):
            logger.error(f"{request.method} {request.url.path}: {exc.message} ({exc.cause})")
        else:
            logger.info(f"{request.method} {request.url.path}: {exc.code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.on_event("startup")
    async def startup():
        app.state.repository = await open_repository(app_settings)
        await seed_business_settings(app.state.repository, app_settings)
        await seed_providers(app.state.repository)
        await seed_admin(app.state.repository, app_settings)
        if app_settings.SCHEDULER_ENABLED:
            app.state.scheduler = start_scheduler(app)

    @app.on_event("shutdown")
    async def shutdown():
        if app.state.scheduler is not None:
            stop_scheduler(app.state.scheduler)
        await app.state.repository.close()

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {app_settings.APP_NAME} API"}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("barberbook.main:app", host="0.0.0.0", port=8000, reload=True)
