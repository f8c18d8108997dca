"""Start the WhatsApp REST API server from environment settings."""

import os
import sys

import uvicorn

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from whatsapp_rest.api.server import create_app  # noqa: E402

if __name__ == "__main__":
    app = create_app()
    settings = app.state.settings

    print(f"Starting WhatsApp REST API on http://{settings.host}:{settings.port}")
    print(f"API documentation: http://localhost:{settings.port}/docs")
    print("Press Ctrl+C to stop\n")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
