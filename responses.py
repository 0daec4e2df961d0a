from fastapi.responses import JSONResponse

from errors import SignupError

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": "Content-Type",
}


def success_response(message: str) -> JSONResponse:
    return JSONResponse({"success": True, "message": message})


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def signup_error_response(exc: SignupError, fallback: str) -> JSONResponse:
    """Map a SignupError to its response, hiding unexposed messages behind ``fallback``."""
    message = exc.message if exc.exposed else fallback
    return error_response(message, exc.status_code)
