"""
Warden entry point.

On first startup provisions the Administration tenant and an administrator
(see ``warden.bootstrap``).
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from warden.config import settings
from warden.api.v1.router import security_router
from warden.api.v1.helpers.responses import register_exception_handlers
from warden.db.session import dispose_engine, get_session_local
from warden.bootstrap import ensure_default_administrator
from warden.exceptions import SecurityServiceError
from warden.security.directories.registry import get_user_directory_types
from warden.security.notifications import LoggingPasswordResetNotifier
from logging import getLogger, Filter
import logging

logger = getLogger(__name__)
logger.setLevel(logging.INFO)


class HealthCheckFilter(Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.getMessage().find("/health") == -1


logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())


app = FastAPI(title=settings.app_name, debug=settings.debug, redirect_slashes=False)
app.state.password_reset_notifier = LoggingPasswordResetNotifier()

register_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    logger.info("--- Starting warden ---")
    logger.info(
        "User directory types: "
        + ", ".join(t.code for t in get_user_directory_types())
    )

    AsyncSessionLocal = get_session_local()
    async with AsyncSessionLocal() as db:
        try:
            await ensure_default_administrator(db)
        except (SQLAlchemyError, SecurityServiceError) as e:
            logger.error(f"Failed to provision the default administrator: {e}")

    logger.info("--- warden startup completed ---")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("--- Server shutting down! ---")
    await dispose_engine()
    logger.info("--- Database connections closed. ---")


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(security_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"message": "Welcome to Warden"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
