import os

from dotenv import load_dotenv
from psycopg.conninfo import make_conninfo

load_dotenv()

host = os.getenv("POSTGRES_HOST", "127.0.0.1")
port = int(os.getenv("POSTGRES_PORT", "5432"))
dbname = os.getenv("POSTGRES_DB", "rust_sqlx")
user = os.getenv("POSTGRES_USER", "postgres")
pwd = os.getenv("POSTGRES_PASSWORD", "postgres")

# database to connect to when ours might not exist yet
maintenance_dbname = "postgres"


def conninfo(database=None):
    """
    Builds the libpq connection string, values quoted as libpq needs
    database: str: database to connect to, by default `dbname`
    Returns: str
    """

    return make_conninfo(
        host=host,
        port=str(port),
        dbname=database or dbname,
        user=user,
        password=pwd,
    )
