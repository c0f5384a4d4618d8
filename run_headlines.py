"""Convenience script for fetching NewsAPI headlines locally."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

# Ensure the src directory is on the Python path so the newsapiorg package can be imported
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from newsapiorg.client import ApiClient  # noqa: E402  (import after path setup)
from newsapiorg.config import ClientConfig  # noqa: E402
from newsapiorg.exceptions import ConfigurationError, NewsAPIClientError  # noqa: E402


def main() -> None:
    """Load the client configuration and print the current top headlines as JSON."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        config = ClientConfig.from_file()
    except FileNotFoundError as exc:
        logging.info("%s; falling back to environment variables", exc)
        config = ClientConfig.from_env()

    env_config = ClientConfig.from_env()
    if not config.api_key and env_config.api_key:
        config = config.model_copy(update={"api_key": env_config.api_key})

    try:
        client = ApiClient.from_config(config)
    except ConfigurationError as exc:
        logging.error("Could not create client: %s", exc)
        sys.exit(1)

    with client:
        logging.info("Fetching top headlines (country=%s, category=%s)", config.country, config.category)
        try:
            articles = client.fetch_articles()
        except NewsAPIClientError as exc:
            logging.error("Failed to fetch headlines: %s", exc)
            sys.exit(1)

    logging.info("Fetched %d articles", len(articles))
    print(json.dumps([article.model_dump(mode="json", by_alias=True) for article in articles], indent=2))


if __name__ == "__main__":
    main()
