# config.py
# Edit these values directly or set them via SQLDBG_* env vars
import os

# Which backend the app talks to: "sqlite" or "databricks"
DB_BACKEND = os.getenv("SQLDBG_DB_BACKEND", "sqlite")

# sqlite: path of the application database file
SQLITE_PATH = os.getenv("SQLDBG_SQLITE_PATH", "app.db")

# databricks: workspace host, warehouse http path and the PAT you created
DATABRICKS_HOST = os.getenv("SQLDBG_DATABRICKS_HOST", "")
DATABRICKS_HTTP_PATH = os.getenv("SQLDBG_DATABRICKS_HTTP_PATH", "")
DATABRICKS_TOKEN = os.getenv("SQLDBG_DATABRICKS_TOKEN", "")

QUERY_TIMEOUT = int(os.getenv("SQLDBG_QUERY_TIMEOUT", "120"))   # seconds

# Row cap appended to SELECTs without their own LIMIT
MAX_ROWS_RETURN = 200

# History log
HISTORY_TABLE = os.getenv("SQLDBG_HISTORY_TABLE", "sql_debugger_history")
HISTORY_DISPLAY_LIMIT = 10

# Shared admin token; empty disables the check (host platform handles auth)
ADMIN_TOKEN = os.getenv("SQLDBG_ADMIN_TOKEN", "")

LOG_LEVEL = os.getenv("SQLDBG_LOG_LEVEL", "INFO")
HOST = os.getenv("SQLDBG_HOST", "0.0.0.0")
PORT = int(os.getenv("SQLDBG_PORT", "8000"))
