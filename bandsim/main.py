import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from bandsim.crud import CreateData
from bandsim.db import engine
from bandsim.errors import register_error_handlers
from bandsim.load_settings import log_level
from bandsim.routers import game

logging.basicConfig(level=getattr(logging, log_level.upper(), logging.INFO))
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app):
    """Create the game tables.
    This function is called to start the server.
    """
    await CreateData.create_table(engine)
    try:
        yield
    finally:
        await engine.dispose()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
register_error_handlers(app)
app.include_router(game.game_router)


# if __name__ == "__main__":
#     uvicorn.run(app, host="0.0.0.0", port=8080, reload=True)
