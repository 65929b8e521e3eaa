"""Local development server for the URL stats service.

Wraps sortkey.handler.lambda_handler in a threaded HTTP server so the
service can be run without API Gateway:

    DATA_COLLECTION_METHOD=file python main.py
    curl 'http://localhost:5000/sortkey/views?limit=3'

Each request becomes an API Gateway style proxy event; the handler's
statusCode, headers and body are written back unchanged.
"""

from __future__ import annotations

import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qsl, urlparse

from sortkey.config import load_config
from sortkey.handler import lambda_handler

logger = logging.getLogger(__name__)


def build_event(method: str, raw_path: str) -> dict:
    """Translate a request line into a proxy event for lambda_handler."""
    parsed = urlparse(raw_path)
    return {
        "httpMethod": method,
        "path": parsed.path or "/",
        "queryStringParameters": dict(parse_qsl(parsed.query)) or None,
    }


class Handler(BaseHTTPRequestHandler):
    def _dispatch(self) -> None:
        result = lambda_handler(build_event(self.command, self.path), None)
        body = result["body"].encode("utf-8")
        self.send_response(result["statusCode"])
        for name, value in result.get("headers", {}).items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    do_GET = _dispatch  # noqa: N815
    do_POST = _dispatch  # noqa: N815
    do_PUT = _dispatch  # noqa: N815
    do_DELETE = _dispatch  # noqa: N815

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.info("%s %s", self.address_string(), format % args)


def main() -> None:
    service_config, _ = load_config()
    address = (service_config.host, service_config.port)
    server = ThreadingHTTPServer(address, Handler)
    logger.info("Listening on %s:%d", *address)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
