from typing import Any, Generic, Iterable, List, Optional, Sequence, Type, TypeVar, Union

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import SQLModel, Session, select, func

from app.core.errors import PersistenceError
from app.core.logger import logger

# Type générique pour le modèle (Todo, ...)
ModelT = TypeVar("ModelT", bound=SQLModel)


class StoreQuery:
    """
    Description d'une requête (filtre / tri / pagination) traduite en SQL par le store.
    Les sous-classes fournissent les clauses pour un modèle donné.
    """

    limit: Optional[int] = None
    offset: Optional[int] = None

    def where_clauses(self, model) -> List[ColumnElement[bool]]:
        raise NotImplementedError

    def order_clause(self, model) -> Any:
        raise NotImplementedError


# Un prédicat : objet requête, clause SQLAlchemy brute, ou None (= tout)
Predicate = Union[StoreQuery, ColumnElement[bool], None]


class BaseStore(Generic[ModelT]):
    """
    Store de base : unit of work sur une table.

    👉 add / add_many / remove / remove_many ne font que préparer les changements.
    👉 save() les écrit tous dans une seule transaction (tout ou rien).
    👉 Les stores concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, engine: Engine, *, owns_engine: bool = False):
        self.engine = engine
        self._owns_engine = owns_engine
        # autoflush=False : rien n'atteint la base avant save()
        self.session = Session(engine, autoflush=False, expire_on_commit=False)

    # ---------- CYCLE DE VIE ----------

    def close(self) -> None:
        self.session.close()
        if self._owns_engine:
            self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ---------- CHANGEMENTS EN ATTENTE ----------

    def add(self, entity: ModelT) -> None:
        """Prépare l'insertion d'un enregistrement (id attribué au save)."""
        self.session.add(entity)

    def add_many(self, entities: Iterable[ModelT]) -> None:
        """Prépare l'insertion d'une séquence ordonnée d'enregistrements."""
        self.session.add_all(list(entities))

    def remove(self, entity: ModelT) -> None:
        """Prépare la suppression d'un enregistrement."""
        state = sa_inspect(entity)
        if state.transient:
            return
        if state.pending:
            # jamais écrit : il suffit de l'oublier
            self.session.expunge(entity)
            return
        self.session.delete(entity)

    def remove_many(self, entities: Iterable[ModelT]) -> None:
        for entity in list(entities):
            self.remove(entity)

    @property
    def is_dirty(self) -> bool:
        return bool(self.session.new or self.session.dirty or self.session.deleted)

    def _validate(self, entity: ModelT) -> None:
        """Hook de validation avant écriture. Lève PersistenceError si invalide."""

    def save(self) -> None:
        """
        Écrit tous les changements en attente dans une seule transaction.
        En cas d'échec : rollback, aucun changement appliqué, PersistenceError.
        """
        try:
            for entity in list(self.session.new) + list(self.session.dirty):
                if entity not in self.session.deleted:
                    self._validate(entity)
        except PersistenceError:
            logger.debug("Validation failed, rolling back ...")
            self.session.rollback()
            raise

        try:
            logger.debug(
                "Committing %d new, %d dirty, %d deleted ...",
                len(self.session.new), len(self.session.dirty), len(self.session.deleted),
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            logger.error("Commit failed on %s: %s", self.model.__tablename__, exc)
            self.session.rollback()
            raise PersistenceError(f"Cannot save changes to {self.model.__tablename__!r}: {exc}") from exc

    # ---------- READ ----------

    def _pk_column(self):
        return sa_inspect(self.model).primary_key[0]

    def _where(self, predicate: Predicate) -> List[ColumnElement[bool]]:
        if predicate is None:
            return []
        if isinstance(predicate, StoreQuery):
            return predicate.where_clauses(self.model)
        return [predicate]

    def _ordering(self, predicate: Predicate, order_by: Any = None):
        if order_by is not None:
            if isinstance(order_by, str):
                if order_by not in sa_inspect(self.model).columns:
                    raise ValueError(f"Cannot order {self.model.__tablename__} by {order_by!r}")
                return getattr(self.model, order_by).asc()
            return order_by
        if isinstance(predicate, StoreQuery):
            return predicate.order_clause(self.model)
        return self._pk_column().asc()

    def _statement(self, predicate: Predicate, order_by: Any = None):
        stmt = select(self.model).where(*self._where(predicate))
        stmt = stmt.order_by(self._ordering(predicate, order_by))
        if isinstance(predicate, StoreQuery):
            if predicate.offset:
                stmt = stmt.offset(predicate.offset)
            if predicate.limit is not None:
                stmt = stmt.limit(predicate.limit)
        return stmt

    def _run(self, fetch):
        try:
            return fetch()
        except SQLAlchemyError as exc:
            logger.error("Query failed on %s: %s", self.model.__tablename__, exc)
            self.session.rollback()
            raise PersistenceError(f"Query failed on {self.model.__tablename__!r}: {exc}") from exc

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self._run(lambda: self.session.get(self.model, id_))

    def find_first(self, predicate: Predicate = None, order_by: Any = None) -> Optional[ModelT]:
        """Premier enregistrement correspondant (id croissant par défaut), ou None."""
        stmt = self._statement(predicate, order_by).limit(1)
        return self._run(lambda: self.session.exec(stmt).first())

    def find_all(self, predicate: Predicate = None, order_by: Any = None) -> Sequence[ModelT]:
        """Tous les enregistrements correspondants, triés (id croissant par défaut)."""
        stmt = self._statement(predicate, order_by)
        return list(self._run(lambda: self.session.exec(stmt).all()))

    def count(self, predicate: Predicate = None) -> int:
        """Nombre d'enregistrements correspondants (pagination ignorée)."""
        stmt = select(func.count(self._pk_column())).where(*self._where(predicate))
        return self._run(lambda: self.session.exec(stmt).one())
