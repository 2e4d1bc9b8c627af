"""Entry: build the card PDF from config and link list, or start the API server."""
import argparse
import logging
import sys
from pathlib import Path

from tentcard.config import API_HOST, API_PORT, CARD_CONFIG_PATH, LOG_FORMAT, LOG_LEVEL, load_card_config

logger = logging.getLogger("tentcard")


def _parse_args(argv):
    parser = argparse.ArgumentParser(prog="tentcard", description="Create foldable QR index cards")
    parser.add_argument("command", nargs="?", choices=("build", "serve"), default="build")
    parser.add_argument("--config", type=Path, default=CARD_CONFIG_PATH, help="card config properties file")
    parser.add_argument("--links", type=Path, help="link list (default: cardsFile from config)")
    parser.add_argument("--out", type=Path, help="output PDF (default: destinationFile from config)")
    parser.add_argument("--reload", action="store_true", help="serve: reload on code changes")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("tentcard.api.app:app", host=API_HOST, port=API_PORT, reload=args.reload)
        return 0

    from tentcard.core.pipeline import run

    try:
        config = load_card_config(args.config)
        run(config, links_path=args.links, destination=args.out)
    except Exception as e:
        logger.exception("Card creation failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
