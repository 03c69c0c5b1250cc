"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from c2b_relay.api.endpoints.c2b import C2BClient, c2b_api
from c2b_relay.error_handler import C2BRelayError, ErrorHandler
from c2b_relay.integrations.clients.mocks.mpesa import MockMpesaC2BClient
from c2b_relay.integrations.clients.real_http.mpesa import RealMpesaC2BClient
from c2b_relay.utils.config_loader import RelayConfig, load_relay_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

error_handler = ErrorHandler()


def _select_c2b_client(config: RelayConfig) -> C2BClient:
    if config.use_real_integrations():
        # An empty token here raises MalformedRequestError and aborts startup.
        return RealMpesaC2BClient(config.mpesa, token=config.bearer_token)
    return MockMpesaC2BClient(config.mpesa)


def create_app(config: Optional[RelayConfig] = None, c2b_client: Optional[C2BClient] = None) -> FastAPI:
    config = config or load_relay_config()
    c2b_client = c2b_client or _select_c2b_client(config)
    mode = "real" if isinstance(c2b_client, RealMpesaC2BClient) else "mock"

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting C2B relay (integrations=%s, upstream=%s)", mode, config.mpesa.url)
        yield
        logger.info("Shutting down C2B relay...")
        await c2b_client.aclose()

    app = FastAPI(
        title="M-Pesa C2B Relay",
        description="Normalizes phone numbers and relays C2B simulate requests to M-Pesa",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.relay_config = config
    app.state.c2b_client = c2b_client

    @app.exception_handler(C2BRelayError)
    async def relay_error_handler(request: Request, exc: C2BRelayError):
        return JSONResponse(status_code=exc.status_code, content=exc.body)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        payload = error_handler.handle_exception(
            exc, context={"request_method": request.method, "request_url": str(request.url)}
        )
        return JSONResponse(status_code=500, content=payload)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "integrations_mode": mode, "timestamp": datetime.now().isoformat()}

    app.include_router(c2b_api)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    config: RelayConfig = app.state.relay_config
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
