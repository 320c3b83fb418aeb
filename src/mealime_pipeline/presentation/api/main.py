from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from mealime_pipeline.application.ports.http_client_port import TransportError
from mealime_pipeline.domain.errors import (
    AuthenticationFailed,
    CsrfError,
    InvalidCredentials,
    MealimeError,
    SessionBusy,
    SessionNotReady,
    StorageCorrupt,
    TokenExtractionError,
    UpstreamRejected,
)
from mealime_pipeline.presentation.api.metrics import registry
from mealime_pipeline.presentation.api.routes.auth import router as auth_router
from mealime_pipeline.presentation.api.routes.grocery import router as grocery_router
from mealime_pipeline.presentation.api.routes.meal_plan import router as meal_plan_router

app = FastAPI(title="Mealime Pipeline", version="0.1.0")
app.include_router(auth_router)
app.include_router(grocery_router)
app.include_router(meal_plan_router)

ERROR_STATUS: dict[type[MealimeError], int] = {
    AuthenticationFailed: 401,
    TokenExtractionError: 502,
    UpstreamRejected: 502,
    CsrfError: 503,
    StorageCorrupt: 503,
    SessionBusy: 409,
    SessionNotReady: 409,
}


@app.exception_handler(MealimeError)
def mealime_error(request: Request, exc: MealimeError) -> JSONResponse:
    status = next((code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)), 500)
    body: dict[str, object] = {"error": type(exc).__name__, "detail": str(exc)}
    if isinstance(exc, UpstreamRejected) and exc.report is not None:
        body["result"] = exc.report.text
    return JSONResponse(status_code=status, content=body)


@app.exception_handler(InvalidCredentials)
def missing_credentials(request: Request, exc: InvalidCredentials) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"error": "InvalidCredentials", "detail": f"{exc}: set MEALIME_EMAIL and MEALIME_PASSWORD"},
    )


@app.exception_handler(TransportError)
def transport_error(request: Request, exc: TransportError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"error": "TransportError", "detail": str(exc)})


@app.get("/health", tags=["health"])  # type: ignore[misc]
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> Response:  # type: ignore[misc]
    data = generate_latest(registry)
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
