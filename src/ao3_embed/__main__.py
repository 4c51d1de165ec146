"""Run the embed service: ``python -m ao3_embed``."""

import uvicorn

from ao3_embed.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "ao3_embed.presentation.app:app",
        host=settings.bind_address,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
