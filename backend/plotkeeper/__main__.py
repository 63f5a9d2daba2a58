import uvicorn

from plotkeeper.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "plotkeeper.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
