"""Local development runner: ``python -m kpi_gateway``."""

import uvicorn

from kpi_gateway.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "kpi_gateway.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
        log_level="info",
    )


if __name__ == "__main__":
    main()
