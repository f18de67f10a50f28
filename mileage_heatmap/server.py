"""
HTTP proxy in front of the mileage spreadsheet.

GET /api/data   normalised records as JSON, 500 {"error": ...} on upstream trouble
GET /           the heatmap page
GET anything    404 "Not Found"

With HEATMAP_ENV=production the module only exposes `app` for an external
ASGI host; otherwise `python -m mileage_heatmap.server` listens on PORT.
"""

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from mileage_heatmap.charts import CHART_CFG
from mileage_heatmap.config import Settings, configure_logging, load_settings
from mileage_heatmap.errors import HeatmapError, MalformedUpstreamPayload, UpstreamUnavailable
from mileage_heatmap.report import Report, build_report
from mileage_heatmap.sheet_data import fetch_records

logger = logging.getLogger(__name__)

PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<style>
body {{font-family: "Outfit", sans-serif; color:#e8eef8; background: linear-gradient(145deg,#060915,#0b1327); margin:0; padding:1.5rem;}}
main {{max-width:1000px; margin:0 auto;}}
h1 {{font-size:1.3rem; margin:0 0 1rem 0;}}
section {{border:1px solid rgba(125,150,180,.26); border-radius:14px; padding:.6rem .8rem; margin-bottom:1rem; background:rgba(12,19,35,.84);}}
</style>
</head>
<body>
<main>
<h1>{title}</h1>
<section id="calendar-heatmap">{heatmap}</section>
<section id="progress-chart">{progress}</section>
</main>
</body>
</html>
"""


def render_page(report: Optional[Report], year: int) -> str:
    if report is None:
        # Data failed to load: the page renders with empty chart sections.
        return PAGE.format(title=f"Mileage {year}", heatmap="", progress="")
    heatmap_html = report.heatmap_figure().to_html(full_html=False, include_plotlyjs="cdn", config=CHART_CFG)
    progress_html = report.progress_figure().to_html(full_html=False, include_plotlyjs=False, config=CHART_CFG)
    return PAGE.format(title=f"Mileage {report.year}", heatmap=heatmap_html, progress=progress_html)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    app = FastAPI(title="Mileage Heatmap", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings

    @app.exception_handler(UpstreamUnavailable)
    async def upstream_unavailable(request: Request, exc: UpstreamUnavailable) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": f"Failed to fetch data: {exc}"})

    @app.exception_handler(MalformedUpstreamPayload)
    async def malformed_payload(request: Request, exc: MalformedUpstreamPayload) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.get("/api/data")
    def api_data() -> List[Dict[str, Any]]:
        return [r.model_dump(mode="json") for r in fetch_records(settings)]

    @app.get("/", response_class=HTMLResponse)
    def index() -> HTMLResponse:
        now = dt.datetime.now()
        try:
            records = fetch_records(settings)
        except HeatmapError:
            logger.exception("Could not load mileage data for the page")
            return HTMLResponse(render_page(None, now.year))
        report = build_report(records, now, settings.yearly_goal)
        return HTMLResponse(render_page(report, now.year))

    @app.get("/{path:path}", response_class=PlainTextResponse)
    def not_found(path: str) -> PlainTextResponse:
        return PlainTextResponse("Not Found", status_code=404)

    return app


app = create_app()


def main() -> None:
    settings = app.state.settings
    if not settings.listens:
        logger.info("Production env: not binding, mount mileage_heatmap.server:app from the host")
        return
    logger.info("Server is running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
