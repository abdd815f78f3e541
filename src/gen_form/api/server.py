"""
Gen-Form HTTP server entry point.

Usage:
    gen-form-server --port 3000

    # Use environment variables
    PORT=3000 GEMINI_API_KEY=... gen-form-server
"""

import argparse
import logging
import sys

import uvicorn

from gen_form.api.app import create_app
from gen_form.config import get_config

logger = logging.getLogger("gen-form")


def main():
    """Main entry point."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="Gen-Form HTTP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  GEMINI_API_KEY       Gemini API key (also: GOOGLE_API_KEY, API_KEY, GCLOUD_API_KEY, GOOGLE_APIKEY)
  GEN_FORM_MODELS      Comma-separated model fallback order
  HOST / PORT          Bind address (default: 0.0.0.0:3000)
  GEN_FORM_LOG_LEVEL   Log level (default: INFO)
        """,
    )

    parser.add_argument(
        "--host",
        default=config.server_host,
        help=f"Host to bind to (default: {config.server_host})",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.server_port,
        help=f"Port to listen on (default: {config.server_port})",
    )

    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))

    if not config.is_configured():
        logger.warning("No API key configured; /api/generate-form will return 500 until one is set")

    logger.info(f"Model fallback order: {', '.join(config.model_fallback_order)}")
    logger.info(f"Server is running on http://{args.host}:{args.port}")

    try:
        uvicorn.run(create_app(config), host=args.host, port=args.port, log_level=config.log_level.lower())
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
