"""Command-line entrypoint that serves the app with uvicorn."""

import uvicorn

from flickr_unfurl.api.app import create_app
from flickr_unfurl.config import Settings
from flickr_unfurl.containers import build_container


def main() -> None:
    """Run the HTTP server on the configured port."""
    settings = Settings()
    app = create_app(build_container(settings))
    uvicorn.run(app, host="0.0.0.0", port=settings.port)  # noqa: S104


if __name__ == "__main__":
    main()
