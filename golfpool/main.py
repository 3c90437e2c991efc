import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from .db import Base, engine
from .errors import ScoringError
from .routers import tournaments
from . import models  # noqa: F401  (tables registered on Base)


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def log_level(name: str) -> int:
    # unknown names ("verbose", "") fall back to INFO instead of failing at import
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=log_level(LOG_LEVEL),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


Base.metadata.create_all(bind=engine)


app = FastAPI(title="Golf Pool")

app.include_router(tournaments.router)


@app.exception_handler(ScoringError)
async def scoring_error_handler(request: Request, exc: ScoringError):
    # bad format / team count / pot / scorecard: nothing gets paid out
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# ---------------------------------------------------------------------------------

@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")
