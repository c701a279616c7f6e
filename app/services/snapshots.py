# app/services/snapshots.py

import datetime as dt
import itertools
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional

from sqlmodel import Session

from app.core.config import NET_WORTH_WINDOW
from app.core.errors import ValidationError

from app.schemas.budget import BudgetCategoryRead
from app.schemas.goal import SavingsGoalRead
from app.schemas.profile import ProfileRead
from app.schemas.stats import MonthlyStatsRead
from app.schemas.transaction import TransactionRead
from app.services import queries
from app.utils.budget_helpers import list_budgets
from app.utils.date_helpers import is_month_key, month_key
from app.utils.goal_helpers import list_goals

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class Collection(str, Enum):
    transactions = "transactions"
    budgets = "budgets"
    goals = "goals"
    stats = "stats"
    profile = "profile"


# Lo que toca cualquier escritura del ledger
LEDGER_COLLECTIONS = frozenset(Collection)


@dataclass
class Subscription:
    user_id: str
    collection: Collection
    listener: Listener
    month: Optional[str] = None
    limit: Optional[int] = None


class SnapshotHub:
    """
    Entrega push de snapshots a quien esté escuchando.

    Después de cada commit el servicio llama `notify` con las colecciones
    tocadas; el hub vuelve a consultar y le pasa a cada listener el estado
    actual. No hay garantía de orden respecto de otras escrituras, solo que la
    escritura confirmada termina reflejándose.
    """

    def __init__(self):
        self._subscriptions: Dict[int, Subscription] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def subscribe(
        self,
        user_id: str,
        collection: Collection,
        listener: Listener,
        *,
        month: Optional[str] = None,
        limit: Optional[int] = None,
        session: Optional[Session] = None,
    ) -> Callable[[], None]:
        if month is not None and not is_month_key(month):
            raise ValidationError(f"Mes inválido: {month!r}, se espera YYYY-MM.")
        if limit is None:
            limit = NET_WORTH_WINDOW
        subscription = Subscription(user_id, Collection(collection), listener, month, limit)
        with self._lock:
            key = next(self._ids)
            self._subscriptions[key] = subscription

        # Con sesión, el primer snapshot se entrega de inmediato
        if session is not None:
            self._deliver(session, subscription)

        def unsubscribe():
            with self._lock:
                self._subscriptions.pop(key, None)

        return unsubscribe

    def notify(self, session: Session, user_id: str, collections: Iterable[Collection] = LEDGER_COLLECTIONS) -> int:
        touched = set(collections)
        with self._lock:
            targets = [
                s for s in self._subscriptions.values()
                if s.user_id == user_id and s.collection in touched
            ]
        for subscription in targets:
            self._deliver(session, subscription)
        return len(targets)

    def snapshot(
        self,
        session: Session,
        user_id: str,
        collection: Collection,
        month: Optional[str] = None,
        limit: Optional[int] = None,
    ):
        if collection == Collection.transactions:
            if limit is None:
                limit = NET_WORTH_WINDOW
            rows = queries.list_transactions(session, user_id, month=month, limit=limit)
            return [TransactionRead.model_validate(t) for t in rows]
        elif collection == Collection.budgets:
            rows = list_budgets(session, user_id, month or month_key(dt.date.today()))
            return [BudgetCategoryRead.model_validate(b) for b in rows]
        elif collection == Collection.goals:
            return [SavingsGoalRead.model_validate(g) for g in list_goals(session, user_id)]
        elif collection == Collection.stats:
            stats = queries.get_month_stats(session, user_id, month or month_key(dt.date.today()))
            return MonthlyStatsRead.model_validate(stats)
        elif collection == Collection.profile:
            profile = queries.get_profile(session, user_id)
            return ProfileRead.model_validate(profile) if profile else None
        raise ValueError(f"Colección desconocida: {collection}")

    def _deliver(self, session: Session, subscription: Subscription) -> None:
        # Se llama después del commit: la escritura ya está hecha, aquí solo se loguea
        try:
            data = self.snapshot(
                session,
                subscription.user_id,
                subscription.collection,
                month=subscription.month,
                limit=subscription.limit,
            )
            subscription.listener(data)
        except Exception:
            logger.exception("Entrega de %s falló", subscription.collection.value)


snapshot_hub = SnapshotHub()
