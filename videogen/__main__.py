import uvicorn

from videogen.config import settings


def main() -> None:
    uvicorn.run("videogen.app:app", host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    main()
