from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dubvault.api import tracks, ratings, users, auth
from dubvault.core.config import settings
import traceback
import logging
import uvicorn # For running programmatically
import os



# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("dubvault")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

app = FastAPI(title="DubVault API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Unhandled errors are logged with their traceback and returned as JSON
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    error_detail = traceback.format_exc()
    logger.error(f"Unhandled exception on {request.url.path}: {str(exc)}\n{error_detail}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "path": request.url.path
        }
    )

# Include routes
app.include_router(tracks.router, prefix="/api", tags=["Tracks"])
app.include_router(ratings.router, prefix="/api", tags=["Ratings"])
app.include_router(users.router, prefix="/api", tags=["users"])
app.include_router(auth.router, prefix="/api", tags=["Authentication"])


@app.get("/")
async def root():
    return {"message": "Welcome to DubVault API"}


if __name__ == "__main__":
    # Deployments pass the port through the environment
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("dubvault.main:app", host="0.0.0.0", port=port, log_level="info")
