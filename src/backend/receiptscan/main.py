import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from receiptscan.config import settings

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(
    title="ReceiptScan API",
    description="Receipt photo to expense fields",
    version="0.1.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {
        "message": "ReceiptScan API",
        "version": "0.1.0",
        "status": "running"
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

# Import routers
from receiptscan.routers import scan

# Include routers
app.include_router(scan.router)
