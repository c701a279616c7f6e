# app/utils/ledger_batch.py

import logging
from typing import Any, Callable, Dict, List, Type

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from app.core.errors import LedgerError, ReferenceNotFound, StoreUnavailable

logger = logging.getLogger(__name__)


class LedgerBatch:
    """
    Unidad de trabajo del ledger.

    Junta las escrituras de una operación (altas, bajas e incrementos relativos)
    y las aplica en una sola transacción de base de datos al llamar `commit()`.
    Los agregados nunca se sobrescriben: `increment` emite
    `UPDATE ... SET col = col + :delta`, así dos escrituras concurrentes del
    mismo usuario no se pisan.
    """

    def __init__(self, session: Session):
        self.session = session
        self._operations: List[Callable[[], None]] = []

    def __len__(self) -> int:
        return len(self._operations)

    def add(self, obj: SQLModel) -> None:
        self._operations.append(lambda: self.session.add(obj))

    def delete(self, obj: SQLModel) -> None:
        self._operations.append(lambda: self.session.delete(obj))

    def ensure(self, model: Type[SQLModel], **where: Any) -> None:
        """
        Inserta la fila con esos valores si todavía no existe.

        En PostgreSQL y SQLite es un `INSERT ... ON CONFLICT DO NOTHING`: si otra
        escritura creó la misma fila entre medio, el choque con la restricción
        única no aborta el batch. Otros motores consultan antes de insertar.
        """

        def _apply():
            insert = _upsert_insert(self.session)
            if insert is not None:
                values = model(**where).model_dump(exclude_none=True)
                self.session.execute(insert(model.__table__).values(**values).on_conflict_do_nothing())
                return
            existing = self.session.exec(select(model).where(*_conditions(model, where))).first()
            if existing is None:
                self.session.add(model(**where))
                self.session.flush()

        self._operations.append(_apply)

    def increment(self, model: Type[SQLModel], where: Dict[str, Any], **deltas: Any) -> None:
        deltas = {column: delta for column, delta in deltas.items() if delta}
        if not deltas:
            return

        def _apply():
            statement = (
                update(model)
                .where(*_conditions(model, where))
                .values({getattr(model, column): getattr(model, column) + delta for column, delta in deltas.items()})
                .execution_options(synchronize_session=False)
            )
            result = self.session.execute(statement)
            if result.rowcount == 0:
                raise ReferenceNotFound(f"{model.__name__} no encontrado para {where}")

        self._operations.append(_apply)

    def commit(self) -> None:
        try:
            for operation in self._operations:
                operation()
            self.session.commit()
        except LedgerError:
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Falló el commit del batch (%d operaciones)", len(self._operations))
            raise StoreUnavailable("No se pudo confirmar la operación en el store.") from exc
        finally:
            self._operations = []


def _conditions(model: Type[SQLModel], where: Dict[str, Any]):
    return [getattr(model, column) == value for column, value in where.items()]


def _upsert_insert(session: Session):
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    return None
