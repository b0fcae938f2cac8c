"""Run the API with uvicorn: python -m userapi"""

import uvicorn

from userapi.config import get_settings


def main() -> None:
    settings = get_settings()
    print(f"Starting server on port {settings.port}...")
    uvicorn.run("userapi.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
