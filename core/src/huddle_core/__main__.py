from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

from huddle_core.app import create_app
from huddle_core.config import load_core_config


def main() -> None:
    # .env values never override variables already present in the environment.
    load_dotenv()

    config = load_core_config()

    logging.basicConfig(
        level=config.logging.level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    uvicorn.run(create_app(config), host=config.network.bind_host, port=config.network.port)


if __name__ == "__main__":
    main()
