"""
StoreGate API - Server Entrypoint
==================================

Usage:
    python -m app          (from the backend/ directory)
    storegate              (console script installed with the package)

Host, port and log level come from the environment (see app.config).
"""

import uvicorn

from app.config import settings


def main() -> None:
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
