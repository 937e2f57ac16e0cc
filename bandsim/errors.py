from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class GameError(Exception):
    def __init__(self, code: str, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GameNotFound(GameError):
    def __init__(self, message: str = "Game not found"):
        super().__init__("NOT_FOUND", message, status.HTTP_404_NOT_FOUND)


class ValidationFailed(GameError):
    """A precondition failed. Nothing was written."""

    def __init__(self, message: str):
        super().__init__("VALIDATION_FAILED", message, status.HTTP_400_BAD_REQUEST)


class PersistenceFailure(GameError):
    """The store rejected or failed the write. Retryable."""

    def __init__(self, message: str = "Failed to persist game state", code: str = "PERSISTENCE_FAILURE",
                 status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE):
        super().__init__(code, message, status_code)


class StaleGameState(PersistenceFailure):
    """The game changed between read and write (version mismatch)."""

    def __init__(self, message: str = "Game was modified by another action, retry"):
        super().__init__(message, "STALE_GAME_STATE", status.HTTP_409_CONFLICT)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(GameError)
    async def game_error_handler(request: Request, exc: GameError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"code": exc.code, "message": exc.message}},
        )
