"""Run the champion server with ``python -m worldbest``."""

import uvicorn

from .core import HOST, PORT


def main() -> None:
    uvicorn.run("worldbest.app:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()
