from fastapi import APIRouter
from barberbook.api.api_v1.endpoints import (
    admin, audit, auth, availability, bookings, business_settings, checkin,
    notifications, providers, queue,
)

router = APIRouter()

# Include all routers
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(providers.router, prefix="/providers", tags=["Providers"])
router.include_router(business_settings.router, prefix="/settings", tags=["Settings"])
router.include_router(availability.router, prefix="/availability", tags=["Availability"])
router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
router.include_router(queue.router, prefix="/queue", tags=["Queue"])
router.include_router(checkin.router, prefix="/checkin", tags=["Check-in"])
router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
router.include_router(audit.router, prefix="/audit", tags=["Audit"])
router.include_router(admin.router, prefix="/admin", tags=["Admin"])
