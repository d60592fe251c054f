import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import CORS_ORIGINS, WEBHOOK_PORT
from travel_agent.api import create_webhook_router
from travel_agent.config.settings import LOGGING_CONFIG
from travel_agent.orchestrator import TravelAgentOrchestrator

# ----------------------
# Basic Logging
# ----------------------
logging.basicConfig(level=LOGGING_CONFIG["level"], format=LOGGING_CONFIG["format"])
logger = logging.getLogger(__name__)


# ----------------------
# App Setup
# ----------------------
def create_app(orchestrator: Optional[TravelAgentOrchestrator] = None) -> FastAPI:
    """Build the FastAPI app around an orchestrator"""
    app = FastAPI(title="Unravel Experience WhatsApp Assistant")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        logger.warning(f"Validation error on {request.url.path}: {errors}")
        return JSONResponse(status_code=400, content={"success": False, "error": errors})

    app.state.orchestrator = orchestrator or TravelAgentOrchestrator()
    app.include_router(create_webhook_router(app.state.orchestrator))

    logger.info("✅ WhatsApp assistant ready")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=WEBHOOK_PORT)
