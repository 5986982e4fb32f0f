"""FastAPI server for the assistkit sidecar.

Launched by a desktop launcher via: python -m assistkit.server --port {port}
"""

from __future__ import annotations

import argparse
import asyncio
import os
import signal

import uvicorn
from fastapi import FastAPI

from assistkit import __version__
from assistkit.config import configure_logging
from assistkit.routes.forms import router as forms_router
from assistkit.routes.notifications import router as notifications_router
from assistkit.routes.ocr import router as ocr_router
from assistkit.routes.reply import router as reply_router
from assistkit.services.reply_generator import close_session

app = FastAPI(
    title="assistkit",
    version=__version__,
    description="Desktop helper sidecar: form autofill, reply drafting, screenshot OCR",
)

# Register route modules.
app.include_router(forms_router, prefix="/api")
app.include_router(reply_router, prefix="/api")
app.include_router(ocr_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")


@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.post("/api/shutdown")
async def shutdown():
    """Graceful shutdown endpoint."""
    close_session()
    # Schedule shutdown after responding.
    asyncio.get_running_loop().call_later(0.5, lambda: os.kill(os.getpid(), signal.SIGTERM))
    return {"status": "shutting_down"}


def main():
    parser = argparse.ArgumentParser(description="assistkit sidecar server")
    parser.add_argument("--port", type=int, required=True, help="Port to listen on")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--log-level", type=str, default=None, help="Override the configured log level")
    args = parser.parse_args()

    configure_logging(args.log_level)

    # Print ready signal for the launcher.
    print(f"ASSISTKIT_READY port={args.port}", flush=True)

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="info",
        access_log=False,
    )


if __name__ == "__main__":
    main()
