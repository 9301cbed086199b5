# db/databricks_client.py
from databricks import sql as dbsql
from databricks.sql import connect
from config import DATABRICKS_HOST, DATABRICKS_HTTP_PATH, DATABRICKS_TOKEN, QUERY_TIMEOUT
from db import Database

# Delta has no AUTOINCREMENT; identity columns are the equivalent
HISTORY_DDL = """
CREATE TABLE IF NOT EXISTS {table} (
    id BIGINT GENERATED ALWAYS AS IDENTITY,
    query STRING NOT NULL,
    execution_time DOUBLE,
    error STRING,
    created_at TIMESTAMP
)
"""


def databricks_database(timeout=QUERY_TIMEOUT):
    if not (DATABRICKS_HOST and DATABRICKS_HTTP_PATH and DATABRICKS_TOKEN):
        raise ValueError("databricks backend needs host, http path and token configured")

    def _connect():
        return connect(
            server_hostname=DATABRICKS_HOST,
            http_path=DATABRICKS_HTTP_PATH,
            access_token=DATABRICKS_TOKEN,
            _socket_timeout=timeout,
        )

    return Database(name="databricks", connect=_connect, driver=dbsql, history_ddl=HISTORY_DDL)
