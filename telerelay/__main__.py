# telerelay/__main__.py
import uvicorn

from telerelay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("telerelay.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
