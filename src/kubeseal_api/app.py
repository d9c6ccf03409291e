"""HTTP surface of kubeseal-api.

This module builds the FastAPI application: the seal and health routes,
Prometheus metrics, CORS and the translation of pipeline errors into
plain-text responses.
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from icecream import ic
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest
from prometheus_client.process_collector import ProcessCollector

from kubeseal_api import __version__, console
from kubeseal_api.config import Settings
from kubeseal_api.exceptions import KubesealApiError
from kubeseal_api.handler import SealRequestHandler
from kubeseal_api.invoker import SealingInvoker, SubprocessInvoker, resolve_binary
from kubeseal_api.models import SealRequest

_METRICS_NAMESPACE = "kubeseal_api"
_UNMATCHED_ENDPOINT = "unmatched"

router = APIRouter()


class RequestMetrics:
    """Per-application Prometheus collectors for HTTP requests.

    Attributes:
        registry: Registry the collectors are bound to.
        requests_total: Counter of handled requests.
        requests_duration: Histogram of request latencies in seconds.

    """

    def __init__(self, registry: CollectorRegistry) -> None:
        """Create the collectors on the given registry."""
        self.registry = registry
        self.requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "endpoint", "status"],
            namespace=_METRICS_NAMESPACE,
            registry=registry,
        )
        self.requests_duration = Histogram(
            "http_requests_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint", "status"],
            namespace=_METRICS_NAMESPACE,
            registry=registry,
        )

    def observe(self, method: str, endpoint: str, status: int, elapsed: float) -> None:
        """Record one finished request."""
        labels = {"method": method, "endpoint": endpoint, "status": str(status)}
        self.requests_total.labels(**labels).inc()
        self.requests_duration.labels(**labels).observe(elapsed)


@router.post("/secrets/seal", response_class=PlainTextResponse)
def seal(payload: SealRequest, request: Request) -> PlainTextResponse:
    """Seal a plaintext secret and return the sealed document.

    Declared as a plain function so FastAPI runs it in its thread pool;
    the file and process I/O never blocks the event loop.
    """
    handler: SealRequestHandler = request.app.state.seal_handler
    return PlainTextResponse(handler.seal(payload))


@router.get("/health", response_class=PlainTextResponse)
def health() -> PlainTextResponse:
    return PlainTextResponse("HEALTHY")


@router.get("/metrics")
def metrics(request: Request) -> Response:
    registry: CollectorRegistry = request.app.state.metrics.registry
    return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)


async def _handle_pipeline_error(_request: Request, exc: KubesealApiError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def _handle_invalid_body(_request: Request, exc: RequestValidationError) -> PlainTextResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    message = f"Invalid request body: {details}"
    console.error(f"400 - {console.literal(message)}")
    return PlainTextResponse(message, status_code=400)


def create_app(settings: Settings | None = None, invoker: SealingInvoker | None = None) -> FastAPI:
    """Build the kubeseal-api application.

    Args:
        settings: Server settings; read from the environment when None.
        invoker: Runs kubeseal; a SubprocessInvoker honoring the configured
            timeout when None.

    Returns:
        The configured FastAPI application.

    """
    if settings is None:
        settings = Settings()
    if invoker is None:
        invoker = SubprocessInvoker(timeout=settings.seal_timeout)

    # Debug dumps include kubeseal command lines and staging paths
    if settings.log_level == "debug":
        ic.enable()
    else:
        ic.disable()

    app = FastAPI(title="kubeseal-api", version=__version__)
    app.state.settings = settings
    app.state.seal_handler = SealRequestHandler(
        invoker,
        binary=resolve_binary(settings.kubeseal_binary),
        staging_dir=settings.staging_dir,
        output_format=settings.kubeseal_format,
    )

    registry = CollectorRegistry()
    ProcessCollector(namespace=_METRICS_NAMESPACE, registry=registry)
    app.state.metrics = RequestMetrics(registry)

    app.include_router(router)
    app.add_exception_handler(KubesealApiError, _handle_pipeline_error)
    app.add_exception_handler(RequestValidationError, _handle_invalid_body)

    known_paths = {route.path for route in router.routes}

    @app.middleware("http")
    async def record_metrics(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        endpoint = request.url.path if request.url.path in known_paths else _UNMATCHED_ENDPOINT
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            app.state.metrics.observe(request.method, endpoint, status, time.perf_counter() - start)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
