from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import engine, quotes

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger("printquote")

app = FastAPI(
    title="Print Quote Engine",
    description=f"Quotation derived-state engine for {settings.COMPANY_NAME}",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(engine.router, prefix="/api")
app.include_router(quotes.router, prefix="/api")

logger.info("%s API ready (currency %s)", settings.APP_NAME, settings.CURRENCY)


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}
