from __future__ import annotations

import logging

import uvicorn

from dealflow.config import Settings
from dealflow.entrypoints.fastapi_app import create_app


def _quiet_logging() -> None:
    # Root defaults
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    # Quiet the usual offenders
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def main() -> None:
    _quiet_logging()

    settings = Settings()
    app = create_app(settings)
    logging.getLogger(__name__).info("API starting (ENV=%s)", settings.ENV)
    uvicorn.run(app, host="0.0.0.0", port=8000, log_config=None)


if __name__ == "__main__":
    main()
