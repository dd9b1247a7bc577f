#!/usr/bin/env python3
"""Entrypoint for the precompressed file server."""

import argparse
import logging
from wsgiref import simple_server

from compressed_http.app import create_app
from compressed_http.settings import settings


def main() -> None:
    """Main entrypoint for the file server."""
    parser = argparse.ArgumentParser(description="Precompressed static file server")
    parser.add_argument("--root", default=settings.precompressed_root, help="Directory to serve")
    parser.add_argument("--port", type=int, default=8080, help="Port to listen on")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--compress", action="store_true", help="Compress responses without a precompressed variant")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger = logging.getLogger(__name__)
    logger.info("Starting file server for %s on %s:%d", args.root, args.host, args.port)

    app = create_app(root=args.root, compress=args.compress)

    with simple_server.make_server(args.host, args.port, app) as httpd:
        logger.info("Serving on http://%s:%d", args.host, args.port)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down...")


if __name__ == "__main__":
    main()
