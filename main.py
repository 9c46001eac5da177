# main.py

from uvicorn import run

from itinerary_share.configs import settings


def main() -> None:
    run(
        "itinerary_share:app",
        host="127.0.0.1",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",
    )


if __name__ == "__main__":
    main()
