from typing import List, Optional
from sqlalchemy import Connection, Engine, Row, create_engine, text
from sqlalchemy.engine import Transaction
from txscope.exceptions import TransactionClosedError
from .base import ExecResult, Finalizable, Openable, Params, Query, Runnable, to_parameters, to_statement


class Tx(Runnable, Finalizable):
    """An open transaction: a checked-out connection and its root transaction."""

    def __init__(self, connection: Connection, transaction: Transaction, owns_connection: bool = True):
        self.connection = connection
        self.transaction = transaction
        self._owns_connection = owns_connection
        self._done = False

    @classmethod
    def adopt(cls, connection: Connection) -> "Tx":
        """Take over the transaction already open on a caller's connection; the connection stays open."""
        transaction = connection.get_transaction()
        if transaction is None:
            raise ValueError("Connection has no active transaction")
        return cls(connection, transaction, owns_connection=False)

    @property
    def closed(self) -> bool:
        return self._done

    def _check(self, operation: str) -> None:
        if self._done:
            raise TransactionClosedError(operation)

    def exec(self, query: Query, params: Params = None) -> ExecResult:
        self._check("exec")
        result = self.connection.execute(to_statement(query), to_parameters(params))
        return ExecResult.from_cursor(result)

    def query(self, query: Query, params: Params = None) -> List[Row]:
        self._check("query")
        return list(self.connection.execute(to_statement(query), to_parameters(params)).all())

    def query_one(self, query: Query, params: Params = None) -> Optional[Row]:
        self._check("query_one")
        return self.connection.execute(to_statement(query), to_parameters(params)).first()

    def commit(self) -> None:
        self._check("commit")
        try:
            self.transaction.commit()
        finally:
            self._release()

    def rollback(self) -> None:
        # A nested scope may already have ended the shared transaction
        if self._done:
            return
        try:
            self.transaction.rollback()
        finally:
            self._release()

    def _release(self) -> None:
        # Finalized either way, like the driver's own transaction state
        self._done = True
        if self._owns_connection:
            self.connection.close()


class Pool(Runnable, Openable):
    """Pool-level handle over an Engine: runs statements in autocommit blocks and begins transactions."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str, echo: bool = False, pool_pre_ping: bool = True, **kwargs) -> "Pool":
        return cls(create_engine(url, echo=echo, pool_pre_ping=pool_pre_ping, **kwargs))

    def connect(self):
        """Check that the database is reachable."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def disconnect(self):
        """Dispose of pooled connections."""
        self.engine.dispose()

    def begin(self) -> Tx:
        connection = self.engine.connect()
        try:
            transaction = connection.begin()
        except Exception:
            connection.close()
            raise
        return Tx(connection, transaction)

    def exec(self, query: Query, params: Params = None) -> ExecResult:
        with self.engine.begin() as conn:
            result = conn.execute(to_statement(query), to_parameters(params))
            return ExecResult.from_cursor(result)

    def query(self, query: Query, params: Params = None) -> List[Row]:
        with self.engine.connect() as conn:
            return list(conn.execute(to_statement(query), to_parameters(params)).all())

    def query_one(self, query: Query, params: Params = None) -> Optional[Row]:
        with self.engine.connect() as conn:
            return conn.execute(to_statement(query), to_parameters(params)).first()
