"""
➡️ But : Contenir la logique métier : orchestrer le store, appliquer les règles.

TodoService : chaque opération prépare ses changements puis appelle save() une seule fois.

Les erreurs du store (StoreConnectionError, PersistenceError) ne sont pas interceptées ici.

"Introuvable" n'est pas une erreur : les méthodes renvoient None.

🔹 Avantages :

Code métier découplé de la base.

Test unitaire possible avec une base SQLite jetable.
"""

from typing import Iterable, List, Optional, Tuple, Union

from app.db.models.todos import Todo
from app.db.repositories.base import Predicate
from app.db.repositories.todos import TodoQuery, TodoStore

# Un titre seul, ou un couple (titre, is_done)
TodoSpec = Union[str, Tuple[str, bool]]


class TodoService:
    def __init__(self, store: TodoStore):
        self.store = store

    # ---------- CREATE ----------

    def add_one(self, title: str, is_done: bool = False) -> Todo:
        todo = Todo(title=title, is_done=is_done)
        self.store.add(todo)
        self.store.save()
        return todo

    def add_many(self, items: Iterable[TodoSpec]) -> List[Todo]:
        todos = []
        for item in items:
            if isinstance(item, str):
                todos.append(Todo(title=item))
            else:
                title, is_done = item
                todos.append(Todo(title=title, is_done=is_done))
        self.store.add_many(todos)
        self.store.save()
        return todos

    # ---------- UPDATE ----------

    def mark_done(self, title: str) -> Optional[Todo]:
        todo = self.store.find_first(TodoQuery(title=title))
        if todo is None:
            return None
        todo.is_done = True
        self.store.save()
        return todo

    def mark_done_matching(self, *fragments: str) -> List[Todo]:
        """Passe à is_done=True toutes les tâches dont le titre contient un des fragments."""
        todos = self.store.find_all(TodoQuery(title_contains=fragments))
        for todo in todos:
            todo.is_done = True
        self.store.save()
        return list(todos)

    # ---------- DELETE ----------

    def delete_by_title(self, title: str) -> Optional[Todo]:
        todo = self.store.find_first(TodoQuery(title=title))
        if todo is None:
            return None
        self.store.remove(todo)
        self.store.save()
        return todo

    def delete_done(self) -> List[Todo]:
        todos = self.store.find_all(TodoQuery(is_done=True))
        self.store.remove_many(todos)
        self.store.save()
        return list(todos)

    # ---------- READ ----------

    def count(self, predicate: Predicate = None) -> int:
        return self.store.count(predicate)

    def first_open(self) -> Optional[Todo]:
        return self.store.find_first(TodoQuery(is_done=False, order_by="id"))

    def list_open(self) -> List[Todo]:
        return list(self.store.find_all(TodoQuery(is_done=False, order_by="id")))
