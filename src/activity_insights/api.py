"""
Analytics API

Serves the full analytics payload for the dashboard. Every request re-reads
the user CSV and recomputes everything; nothing is cached between calls.
"""

import logging

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse

from activity_insights import config
from activity_insights.utils.analysis import run_analytics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analytics"])


@router.get("/analytics")
def get_analytics():
    """
    Enriched users plus cluster, team, ranking and statistics summaries.

    Returns 500 with a generic error body if the data cannot be loaded or
    processed; no partial results are returned.
    """
    try:
        result = run_analytics(config.CSV_PATH)
        return result.to_dict()
    except Exception:
        logger.exception("Error processing analytics")
        return JSONResponse(
            status_code=500, content={"error": config.API_ERROR_MESSAGE}
        )


def create_app():
    app = FastAPI(title="Activity Insights")
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
