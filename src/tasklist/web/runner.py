"""Uvicorn server runner."""

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from tasklist.app import App
from tasklist.config import Config
from tasklist.web.server import create_fastapi_app


def build_log_config() -> dict:
    log_config = {**LOGGING_CONFIG, "formatters": {k: dict(v) for k, v in LOGGING_CONFIG["formatters"].items()}}
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - %(client_addr)s "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"
    return log_config


def run_server(app: App, config: Config) -> None:
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=build_log_config(),
        log_level="debug" if config.debug else "info",
        access_log=True,
    )
