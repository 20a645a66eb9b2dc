"""
➡️ But : Encapsuler toutes les opérations de base de données sur la table `todos`.

TodoQuery : description d'un filtre (titre, fragments de titre, is_done), d'un tri et d'une pagination.

TodoStore : unit of work sur Todo (add, remove, save, find_first, find_all, count).

Ne contient aucune logique métier, juste de la persistance.

🔹 Avantages :

Les requêtes sont des valeurs : faciles à construire, comparer et tester.

Le service n'a pas besoin de connaître SQLAlchemy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlmodel import or_

from app.core.config import Settings
from app.core.errors import PersistenceError
from app.db.models.todos import Todo
from app.db.repositories.base import BaseStore, StoreQuery
from app.db.schema import ensure_schema
from app.db.session import engine_from_settings
from app.features.todos.schemas import TodoIn

ORDERABLE_FIELDS = ("id", "title", "created_at", "is_done")


@dataclass(frozen=True)
class TodoQuery(StoreQuery):
    """
    Filtre / tri / pagination sur Todo. Un champ laissé à None ne filtre pas.
    - title          : titre exact
    - title_contains : fragments de titre, combinés en OU
    - is_done        : état de la tâche
    - order_by       : id | title | created_at | is_done (id par défaut)
    """

    title: Optional[str] = None
    title_contains: Union[str, Tuple[str, ...]] = ()
    is_done: Optional[bool] = None
    order_by: str = "id"
    descending: bool = False
    limit: Optional[int] = None
    offset: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.title_contains, str):
            object.__setattr__(self, "title_contains", (self.title_contains,))
        else:
            object.__setattr__(self, "title_contains", tuple(self.title_contains))

        if self.order_by not in ORDERABLE_FIELDS:
            raise ValueError(f"Cannot order todos by {self.order_by!r}")
        if self.limit is not None and self.limit < 0:
            raise ValueError("limit must be >= 0")
        if self.offset is not None and self.offset < 0:
            raise ValueError("offset must be >= 0")

    def where_clauses(self, model) -> List:
        clauses = []
        if self.title is not None:
            clauses.append(model.title == self.title)
        if self.title_contains:
            clauses.append(
                or_(*(model.title.contains(fragment, autoescape=True) for fragment in self.title_contains))
            )
        if self.is_done is not None:
            clauses.append(model.is_done.is_(self.is_done))
        return clauses

    def order_clause(self, model):
        column = getattr(model, self.order_by)
        return column.desc() if self.descending else column.asc()


class TodoStore(BaseStore[Todo]):
    """
    Store pour la table Todo.
    Hérite de l'unit of work générique de BaseStore.
    Ajoute la création du schéma et la validation des titres avant écriture.
    """
    model = Todo

    @classmethod
    def from_settings(cls, settings: Settings) -> "TodoStore":
        """Ouvre un store qui possède son propre engine (libéré à la fermeture)."""
        return cls(engine_from_settings(settings), owns_engine=True)

    @classmethod
    def from_engine(cls, engine: Engine) -> "TodoStore":
        return cls(engine)

    def ensure_schema(self) -> None:
        """Crée la table `todos` si besoin (idempotent)."""
        ensure_schema(self.engine)

    def _validate(self, entity: Todo) -> None:
        try:
            TodoIn.model_validate({"title": entity.title, "is_done": entity.is_done})
        except ValidationError as exc:
            raise PersistenceError(f"Invalid todo {entity!r}: {exc.errors()[0]['msg']}") from exc
