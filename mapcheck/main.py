import logging

from fastapi import FastAPI
from mapcheck.api.analysis import router as analysis_router
from mapcheck.core.config import LOG_LEVEL

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)

app = FastAPI(
    title="Entity / View-Model Mapping Checker",
    version="1.0.0",
)

# main API
app.include_router(analysis_router, prefix="/api", tags=["Analysis"])

# liveness check
@app.get("/")
def root():
    return {"message": "Mapping Checker Backend is running"}
