import sys
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from klse_blogger.routers import analyze_report
from klse_blogger.settings import settings

logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(
    title="KLSE Report Blogger",
    version=settings.APP_VERSION,
    description=(
        "Upload a Bursa Malaysia (KLSE) quarterly report PDF and let Google Gemini "
        "turn it into a Chinese financial blog post in HTML, written for Malaysian retail investors."
    )
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allow all methods
    allow_headers=["*"],  # Allow all headers
)

# Stylesheets for the page and the generated blog post markup
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.include_router(analyze_report.router)

@app.get("/health")
async def health():
    return {
        "status": "ok",
        "project": "KLSE Report Blogger",
        "version": app.version,
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc"
        }
    }
