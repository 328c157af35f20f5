"""FastAPI REST server for recordstore."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from recordstore.config import Settings
from recordstore.exceptions import RecordNotFound
from recordstore.storage import ValueStore, create_store
from server.auth.credentials import CredentialTable, load_credential_table
from server.auth.gate import AuthGate
from server.metrics import CONTENT_TYPE_LATEST, Metrics
from server.middleware import AuthGateMiddleware, MetricsMiddleware
from server.models import AppMetadata, HealthResponse
from server.values_routes import router as values_router

load_dotenv()

log = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    credentials: CredentialTable | None = None,
    store: ValueStore | None = None,
) -> FastAPI:
    """Build the application and its services.

    The store, gate and metrics are created once here and live on
    ``app.state`` for the lifetime of the app.
    ``run()`` hands this factory to uvicorn so each process builds one app.
    """
    settings = settings or Settings.from_env()
    if credentials is None:
        credentials = load_credential_table(settings.users_file)
    if store is None:
        store = create_store(settings.store_kind)

    metadata = AppMetadata(
        name=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
    )
    app = FastAPI(title=metadata.name, description=metadata.description, version=metadata.version)

    metrics = Metrics()
    metrics.bind_store(store)

    app.state.settings = settings
    app.state.metadata = metadata
    app.state.store = store
    app.state.gate = AuthGate(credentials)
    app.state.metrics = metrics

    # last added runs first, so rejected requests are still counted
    app.add_middleware(AuthGateMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_exception_handler(RecordNotFound, _record_not_found)
    app.include_router(values_router)

    # ------------------------------------------------------------------
    # Metadata / health / metrics (no auth)
    # ------------------------------------------------------------------

    @app.get("/info", response_model=AppMetadata)
    def info(request: Request):
        return request.app.state.metadata

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request):
        return HealthResponse(
            status="ok",
            version=request.app.state.metadata.version,
            records=request.app.state.store.count(),
        )

    @app.get("/metrics")
    def prometheus_metrics(request: Request):
        return Response(content=request.app.state.metrics.render(), media_type=CONTENT_TYPE_LATEST)

    log.info(
        "recordstore %s ready (%s store, %d credential(s))",
        metadata.version,
        store.kind.value,
        len(credentials),
    )
    return app


async def _record_not_found(request: Request, exc: RecordNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content=str(exc))


# ------------------------------------------------------------------
# Entrypoint
# ------------------------------------------------------------------


def run():
    import uvicorn

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("server.api:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
