"""FastAPI application for studio page code generation."""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studio_codegen import __version__
from studio_codegen.routes import render

# Load environment variables
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    logger.info("Starting Studio Codegen Service...")
    logger.info(f"Server running on port {os.getenv('PORT', '8080')}")
    logger.info("Ready for requests")
    yield
    # Shutdown
    logger.info("Shutting down Studio Codegen Service...")


# Create FastAPI app
app = FastAPI(
    title="Studio Codegen",
    description="Compiles studio page documents to React modules",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(render.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "studio_codegen.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8080")),
    )
