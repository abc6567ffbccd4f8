# Infrastructure clients
from clients.database_client import DatabaseClient, sqlite_url
