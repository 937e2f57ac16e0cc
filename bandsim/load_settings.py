import os
from dotenv import load_dotenv

from bandsim.domain.policy import GatePolicy

load_dotenv()

database_backend = os.getenv("DATABASE_BACKEND", "sqlite")
sqlite_path = os.getenv("SQLITE_PATH")
user = os.getenv("DB_USER")
password = os.getenv("DB_PASSWORD")
host = os.getenv("DB_HOST")
port = os.getenv("DB_PORT")
db_name = os.getenv("DB_NAME")
log_level = os.getenv("LOG_LEVEL", "INFO")

gate_policy = GatePolicy(
    work_last_hour=int(os.getenv("WORK_LAST_HOUR", "18")),
    performance_open_hour=int(os.getenv("PERFORMANCE_OPEN_HOUR", "13")),
    performance_close_hour=int(os.getenv("PERFORMANCE_CLOSE_HOUR", "18")),
    shop_open_hour=int(os.getenv("SHOP_OPEN_HOUR", "9")),
    shop_close_hour=int(os.getenv("SHOP_CLOSE_HOUR", "18")),
    min_labor_mental=int(os.getenv("MIN_LABOR_MENTAL", "30")),
)

if __name__ == "__main__":
    print(database_backend, sqlite_path, user, host, port, db_name, log_level, gate_policy)
