import uvicorn

from . import config
from .logger import logger


def main() -> None:
    port = config.port()
    logger.info("Server running on port {}", port)
    uvicorn.run("anjasmara.main:app", host=config.host(), port=port)


if __name__ == "__main__":
    main()
