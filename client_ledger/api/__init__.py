"""
Client Ledger API Application Factory
"""

from typing import Optional
from fastapi import FastAPI
import uvicorn

from .clients import router as clients_router
from .transactions import router as transactions_router
from .admin import router as admin_router
from .schemas import GenericResponse
from ..config import get_config
from ..logging_config import setup_logging
from ..system import LedgerSystem


def create_app(system: Optional[LedgerSystem] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    config = system.config if system else get_config()

    app = FastAPI(
        title="Client Ledger API",
        description="In-memory client ledger with daily balance snapshots",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ledger_system = system or LedgerSystem(config=config)

    prefix = config.api_prefix
    app.include_router(clients_router, prefix=prefix, tags=["Clients"])
    app.include_router(transactions_router, prefix=prefix, tags=["Transactions"])
    app.include_router(admin_router, prefix=prefix, tags=["Snapshots"])

    # Health check endpoint
    @app.get(f"{prefix}/healthchecker")
    async def health_checker():
        """Health check endpoint"""
        return GenericResponse(status="success", message="Client ledger is running").model_dump()

    return app


# Run server function
def run_server(host: Optional[str] = None, port: Optional[int] = None, debug: bool = False):
    """Run the FastAPI server"""
    config = get_config()
    setup_logging(config.log_level, config.log_format)

    uvicorn.run(
        "client_ledger.api:create_app",
        factory=True,
        host=host or config.api_host,
        port=port or config.api_port,
        reload=debug,
        log_level=config.log_level.lower()
    )
