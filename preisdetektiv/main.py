import logging
from typing import Optional

from fastapi import Depends, FastAPI, File, Request, Response, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .config import get_settings
from .contracts_models import AnalysisResult, ErrorResponse, HealthResponse
from .services.errors import AiServiceError, GENERIC_FAILURE_MESSAGE
from .services.model_client import ModelClient
from .services.relay import analyze_image

settings = get_settings()

logger = logging.getLogger("preisdetektiv")
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))


def get_model_client(request: Request) -> ModelClient:
    return request.app.state.model_client


def create_app(model_client: Optional[ModelClient] = None) -> FastAPI:
    app = FastAPI(title="Binnenmarkt Preisdetektiv Relay", version="0.1.0")
    app.state.model_client = model_client or ModelClient.from_settings()

    @app.exception_handler(RequestValidationError)
    async def invalid_request_handler(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request at %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "No image provided"})

    @app.get("/health", status_code=200, response_model=HealthResponse)
    async def health_get():
        return {"status": "ok"}

    @app.head("/health", status_code=200)
    async def health_head():
        return Response(status_code=200)

    @app.post(
        "/api/analyze",
        status_code=status.HTTP_200_OK,
        responses={
            200: {"model": AnalysisResult},
            400: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def analyze(
        request: Request,
        image: Optional[UploadFile] = File(default=None),
        model_client: ModelClient = Depends(get_model_client),
    ):
        try:
            if image is None:
                raise AiServiceError(
                    code="INVALID_INPUT",
                    message="No image provided",
                    http_status=400,
                )
            image_bytes = await image.read()
            logger.debug(
                "analyze image=%s type=%s bytes=%s",
                image.filename,
                image.content_type,
                len(image_bytes),
            )
            raw = await run_in_threadpool(
                analyze_image, image_bytes, image.content_type, model_client
            )
            return Response(content=raw, media_type="application/json")
        except AiServiceError as exc:
            logger.warning(
                "Analyze failed at %s: code=%s message=%s details=%s",
                request.url.path,
                exc.code,
                exc.message,
                exc.details,
            )
            return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())
        except Exception:
            logger.exception("Unexpected analyze failure at %s", request.url.path)
            return JSONResponse(
                status_code=500,
                content={"error": GENERIC_FAILURE_MESSAGE},
            )

    return app


app = create_app()


def run_api() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.RELAY_HOST, port=settings.RELAY_PORT)


if __name__ == "__main__":
    run_api()
