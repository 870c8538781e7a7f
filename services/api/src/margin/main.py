import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from services.api.src.margin.routes import api_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="DeepBook Margin Pool API")

# CORS for frontend
cors_origins = [
    "http://localhost:3000",
    "https://localhost:3000",
]

# Add custom origin from environment
if os.getenv("CORS_ORIGIN"):
    cors_origins.append(os.getenv("CORS_ORIGIN"))

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"service": "deepbook-margin-api", "docs": "/docs"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
