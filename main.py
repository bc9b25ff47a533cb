"""
Run the Semantic Solana API with uvicorn.

Reads .env from the project root (see semantic_solana.config.env). Without
HELIUS_API_KEY the search endpoint serves demo transactions.

Equivalent: uvicorn semantic_solana.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

from semantic_solana.config.env import get_api_host, get_api_port, is_demo_mode, load_semantic_env
from semantic_solana.semantic_logging import configure_logging, get_logger


def main() -> None:
    # LOG_LEVEL / LOG_FORMAT may only be set in .env
    load_semantic_env()
    configure_logging()
    logger = get_logger("main")

    host, port = get_api_host(), get_api_port()
    if is_demo_mode():
        logger.warning("main_demo_mode", detail="HELIUS_API_KEY not set, /api/search serves demo data")

    import uvicorn

    from semantic_solana.api_server.app import app

    logger.info("main_server_starting", host=host, port=port)
    uvicorn.run(app, host=host, port=port, log_level=(os.getenv("LOG_LEVEL") or "info").lower())


if __name__ == "__main__":
    main()
