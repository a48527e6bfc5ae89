"""Repository exceptions and FastAPI exception handlers."""


from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import MultipleResultsFound, NoResultFound

class AppException(Exception):
    """Base exception for everything raised by this package."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

class ArgumentNullError(AppException, ValueError):
    """A required argument was ``None``. Raised before touching the database."""

    def __init__(self, param_name: str):
        self.param_name = param_name
        super().__init__(
            f"Value cannot be None. (Parameter '{param_name}')",
            status_code=422,
            code="ARGUMENT_NULL",
        )

class ArgumentOutOfRangeError(AppException, ValueError):
    def __init__(self, param_name: str, value: object):
        self.param_name = param_name
        self.value = value
        super().__init__(
            f"Value {value!r} is out of range. (Parameter '{param_name}')",
            status_code=422,
            code="ARGUMENT_OUT_OF_RANGE",
        )

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}

def register_exception_handlers(app: FastAPI) -> None:
    """Map repository and SQLAlchemy lookup errors to JSON responses."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message),
        )

    @app.exception_handler(NoResultFound)
    async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("NOT_FOUND", "Resource not found"),
        )

    @app.exception_handler(MultipleResultsFound)
    async def multiple_results_handler(
        request: Request, exc: MultipleResultsFound
    ) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content=_error_body("MULTIPLE_RESULTS", "More than one resource matched"),
        )
