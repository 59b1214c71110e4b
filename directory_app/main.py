from contextlib import asynccontextmanager
import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from directory_app.api.routes import router as search_router
from directory_app.config import LOG_LEVEL
from directory_app.services.datasets import DirectorySession

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

frontend_dir = os.path.join(os.path.dirname(__file__), "..", "frontend")
index_file = os.path.join(frontend_dir, "index.html")


@asynccontextmanager
async def lifespan(app: FastAPI):
    session: DirectorySession = app.state.session
    # FAQ waits until someone opens it; the directory is the landing view
    if not session.directory.initialized:
        session.directory.start()
    yield


def create_app(session: Optional[DirectorySession] = None) -> FastAPI:
    app = FastAPI(title="Public Directory Search", version="1.0", lifespan=lifespan)
    app.state.session = session or DirectorySession()

    # ---- Enable CORS ----
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---- Serve Frontend ----
    if os.path.isdir(frontend_dir):
        app.mount("/frontend", StaticFiles(directory=frontend_dir), name="frontend")

    app.include_router(search_router, prefix="/api", tags=["Search"])

    @app.get("/", tags=["Frontend"])
    def serve_index():
        if os.path.exists(index_file):
            return FileResponse(index_file)
        return {"status": "error", "message": "index.html not found"}

    return app


app = create_app()
