from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from flowcheck.api import health, nbi
from flowcheck.core.config import settings

app = FastAPI(
    title="Flow Rule Validation API.",
    version="1.0.0",
    description="Flow rule validation, conflict detection and packet simulation for the network dashboard.",
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FLOWCHECK_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(nbi.router)
