import logging

from fastapi import FastAPI

from .db import ensure_schema
from .settings import settings
from .routers import auth
from .routers import games
from .routers import reports
from .routers import facilitation

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Tutor Co-Pilot API")
app.include_router(auth.router)
app.include_router(games.router)
app.include_router(reports.router)
app.include_router(facilitation.router)


@app.get("/info")
def root():
	return {"status": "ok", "llm_configured": bool(settings.llm_api_key)}


@app.on_event("startup")
async def startup_event():
	# Local SQLite only; the simulator database schema is not ours to create
	ensure_schema()
	logger.info("Tutor Co-Pilot API started (llm configured: %s)", bool(settings.llm_api_key))
