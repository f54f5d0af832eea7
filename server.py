"""
Survey Brief Webhook Server

POST /ss   survey submission → emailed DOCX brief
GET  /healthz
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from config import BriefConfig
from errors import MalformedSubmissionError
from intake import IntakeHandler
from logging_utils import log_exception, setup_service_logging

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "File processed and email sent."
ERROR_MESSAGE = "Internal Server Error"


def create_app(handler: Optional[IntakeHandler] = None) -> FastAPI:
    intake = handler or IntakeHandler()
    app = FastAPI(title="Survey Brief Service")
    app.state.intake = intake

    @app.post("/ss", response_class=PlainTextResponse)
    async def submit_survey(request: Request) -> PlainTextResponse:
        survey_id = None
        try:
            try:
                payload = json.loads(await request.body() or b"null")
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise MalformedSubmissionError(f"Submission body is not valid JSON: {exc}") from exc
            if isinstance(payload, dict):
                survey_id = payload.get("survey_id")
            # Rendering, pandoc and SMTP all block; keep them off the event loop.
            result = await run_in_threadpool(intake.handle, payload)
        except MalformedSubmissionError as exc:
            logger.warning("Rejected submission: %s", exc)
            return PlainTextResponse(str(exc), status_code=400)
        except Exception as exc:
            log_exception(logger, exc, context="Survey submission failed", survey_id=survey_id)
            return PlainTextResponse(ERROR_MESSAGE, status_code=500)
        logger.info("Processed %s survey for %s", result.survey_type, result.company)
        return PlainTextResponse(SUCCESS_MESSAGE, status_code=200)

    @app.get("/healthz")
    def healthz():
        return {
            "ok": True,
            "renderer": intake.renderer.name,
            "verticals": intake.registry.verticals,
        }

    return app


def main() -> None:
    import uvicorn

    setup_service_logging(BriefConfig.LOG_DIR or None, BriefConfig.LOG_LEVEL)
    app = create_app()
    logger.info("Server running on port %d", BriefConfig.PORT)
    uvicorn.run(app, host="0.0.0.0", port=BriefConfig.PORT, log_config=None)


if __name__ == "__main__":
    main()
