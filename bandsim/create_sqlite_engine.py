import pathlib

from sqlalchemy.ext.asyncio import create_async_engine

from bandsim.load_settings import sqlite_path

file_path = pathlib.Path(sqlite_path) if sqlite_path else pathlib.Path(__file__).parents[1] / "bandsim.sqlite3"
sqlite_url = f"sqlite+aiosqlite:///{file_path}"


engine = create_async_engine(url=sqlite_url, echo=False)
