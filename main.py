"""Entrypoint to run the Smart Outfit Assistant API locally."""

import uvicorn

from assistant_app.config import AppConfig


def main() -> None:
    config = AppConfig.from_env()
    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=config.port, reload=False)


if __name__ == "__main__":
    main()
