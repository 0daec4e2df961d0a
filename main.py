import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings
from responses import CORS_HEADERS, error_response
from routes import signup_router

logger = logging.getLogger(__name__)

logging.basicConfig(level=get_settings().log_level)

app = FastAPI(title="Neural Commander Signups")

# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(signup_router)


# ── CORS: any origin may post the forms ──────────────────────────────────────
@app.middleware("http")
async def cors_headers(request: Request, call_next):
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


# ── Error bodies use {"error": ...} like the handlers ────────────────────────
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return error_response("Method not allowed", 405)
    return error_response(str(exc.detail), exc.status_code)


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed body on %s: %s", request.url.path, exc.errors())
    return error_response("Invalid request body", 400)


# ── Local dev entry point ────────────────────────────────────────────────────
if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Neural Commander signup endpoints")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to listen on (default: $PORT or 8000)",
    )
    args = parser.parse_args()

    settings = get_settings()
    if not settings.email_configured:
        logger.warning("SENDGRID_API_KEY is not set - submissions will not send email")
    if not settings.turnstile_secret_key:
        logger.warning("TURNSTILE_SECRET_KEY is not set - bot verification is disabled")

    uvicorn.run("main:app", host="0.0.0.0", port=args.port)
