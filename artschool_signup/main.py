import uvicorn as uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from artschool_signup.config.settings import settings
from artschool_signup.config.database import startDB
from artschool_signup.routes import emailRoute, signupRoute

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Initialize FastAPI app with lifespan context
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize database connection and models (startup logic)
    await startDB()
    logger.info(f"✅ Connected to {settings.MONGO_DATABASE} ({settings.ENVIRONMENT})")

    yield


app = FastAPI(
    lifespan=lifespan,
    title=settings.SCHOOL_NAME,
    docs_url=None if settings.ENVIRONMENT.lower() == "production" else "/docs",
    redoc_url=None if settings.ENVIRONMENT.lower() == "production" else "/redoc"
)


async def global_exception_handler(request: Request, exc: Exception):
    """Format unhandled errors as a 500 without leaking internals"""
    logger.error(f"Unexpected error on {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "type": exc.__class__.__name__,
                "message": "Internal server error",
                "detail": "Please contact support",
                "path": request.url.path,
            }
        },
    )


# HTTPException and RequestValidationError keep FastAPI's own {"detail": ...} handlers
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(signupRoute.router, tags=['Signup'])
app.include_router(signupRoute.api_router, tags=['Signup'], prefix='/api/v1')
app.include_router(emailRoute.router, tags=['Email'])


@app.get("/api/healthchecker")
def root():
    return {"message": f"Welcome to {settings.SCHOOL_NAME}"}


if __name__ == "__main__":
    uvicorn.run("artschool_signup.main:app", host="0.0.0.0", port=5001, reload=True, log_level="info")
