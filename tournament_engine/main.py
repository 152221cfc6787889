import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tournament_engine.database import init_db
from tournament_engine.routes import tournaments

APP_NAME = "Tournament Fixture Engine API"

app = FastAPI(title=APP_NAME)

# Comma separated; the local frontend dev server by default
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(tournaments.router, prefix="/api", tags=["tournaments"])


@app.on_event("startup")
def on_startup():
    init_db()


@app.get("/api/health")
def health_check():
    return {"app_name": APP_NAME, "status": "healthy"}
