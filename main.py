"""Entry point for the print gateway service."""
from config.log import setup_logging
from config.settings import LOGGING, SERVICE
from server.app import create_app

logger = setup_logging(LOGGING)
app = create_app(logger=logger)


def ssl_context():
    cert, key = SERVICE.get("tls_cert_path"), SERVICE.get("tls_key_path")
    if cert and key:
        return cert, key
    return None


if __name__ == "__main__":
    context = ssl_context()
    logger.info("Server starting on port %s%s", SERVICE.get("port", 8080), " (TLS)" if context else "")
    app.run(
        host=SERVICE.get("host", "0.0.0.0"),
        port=SERVICE.get("port", 8080),
        debug=SERVICE.get("debug", False),
        threaded=True,
        ssl_context=context,
    )
