"""
handlers/schema_handler.py
---------------------------
GET|POST /initDb: create tables and indexes if they are missing.
"""

from db.connection import Database
from db.init_db import create_tables
from handlers.http import Request, Response, endpoint, json_response


@endpoint(failure="Database initialization failed")
def init_db(request: Request, db: Database) -> Response:
    create_tables(db)
    return json_response(200, {"message": "Database initialized successfully"})
