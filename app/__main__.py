import uvicorn

from app.config.settings import config


def main() -> None:
    uvicorn.run("app.main:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
