import os
import time
import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from . import metrics
from .auth_middleware import WorkerAuthMiddleware
from .storyboard import storyboard_router
from .storyboard.ranker import INVERSION_SLACK
from .storyboard.validator import RESEQUENCE_THRESHOLD

load_dotenv()

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Storyboard worker starting up (slack={INVERSION_SLACK}, "
        f"resequence_threshold={RESEQUENCE_THRESHOLD})"
    )
    metrics.set_gauge("start_time", time.time())
    yield
    logger.info("Storyboard worker shutting down...")


app = FastAPI(title="Listing Storyboard Worker", lifespan=lifespan)
app.add_middleware(WorkerAuthMiddleware)
app.include_router(storyboard_router)


@app.get("/health")
def health_check():
    """Verify worker is running and report its sequencing config."""
    return {
        "status": "ok",
        "worker_secret_set": bool(os.environ.get("WORKER_SHARED_SECRET")),
        "inversion_slack": INVERSION_SLACK,
        "resequence_threshold": RESEQUENCE_THRESHOLD,
    }


@app.get("/metrics")
def metrics_endpoint():
    """Return a snapshot of all worker metrics."""
    return metrics.get_snapshot()


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    uvicorn.run("listing_worker.main:app", host="0.0.0.0", port=port, reload=True)
