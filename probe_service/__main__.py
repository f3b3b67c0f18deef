import uvicorn

from probe_service.config import Settings


def main() -> None:
    settings = Settings.from_env()
    # Single worker: /load must pressure the same process that serves probes.
    uvicorn.run(
        "probe_service.main:app",
        host="0.0.0.0",
        port=settings.port,
        workers=1,
        log_config=None,
    )


if __name__ == "__main__":
    main()
