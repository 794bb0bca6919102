"""Entry point for running the relay directly."""

import uvicorn

from .config import HOST, PORT, LOG_LEVEL


def main():
    """Run the relay server."""
    uvicorn.run(
        "gemini_relay.app:app",
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
