from __future__ import annotations

from .bootstrap import ensure_schema
from .database import create_session_factory, create_store_engine
from .sql_repos import SqlTaskRepository, SqlUserRepository


class Container:
    def __init__(self, database_url: str, create_schema: bool = True) -> None:
        self.database_url = database_url
        self.engine = create_store_engine(database_url)
        if create_schema:
            ensure_schema(self.engine)

        self.session_factory = create_session_factory(self.engine)
        self.tasks = SqlTaskRepository(self.session_factory)
        self.users = SqlUserRepository(self.session_factory)

    def dispose(self) -> None:
        self.engine.dispose()
