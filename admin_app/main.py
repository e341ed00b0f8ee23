"""
Main FastAPI application entry point.
Configures and initializes the ODS Admin App API.
"""
import logging
from fastapi import FastAPI, Request
from mangum import Mangum
from admin_app.core.config import settings
from admin_app.core.exception_handler import register_exception_handlers
from admin_app.api.routes import health_routes, ods_instance_settings_routes

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Administration of ODS instance bulk loads and learning standards",
    root_path=f"/{settings.environment}"
)

# Register exception handlers
register_exception_handlers(app)

# Register routes
app.include_router(health_routes.router)
app.include_router(ods_instance_settings_routes.router)

# Middleware to log request paths
@app.middleware("http")
async def log_request(request: Request, call_next):
    logger.info("Request path: %s", request.url.path)
    response = await call_next(request)
    return response

# Lambda handler for AWS
handler = Mangum(app, lifespan="off")


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
