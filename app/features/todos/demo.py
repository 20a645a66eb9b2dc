"""
➡️ But : Dérouler le scénario CRUD complet, une opération après l'autre.

insert-one, insert-many, update-one, update-many, delete-one, delete-many, count, lecture filtrée.

Chaque étape affiche une ligne de progression via `out` (print par défaut).

Aucune erreur n'est interceptée : la première qui survient interrompt le scénario.
"""

from typing import Callable

from app.features.todos.schemas import TodoOut
from app.features.todos.services import TodoService


def run_demo(service: TodoService, out: Callable[[str], None] = print) -> None:
    one = service.add_one("Buy milk", is_done=False)
    out(f"Added one: id={one.id}")

    batch = service.add_many(["Write report", "Read book", "Do workout"])
    out(f"Added many: {len(batch)}")

    updated = service.mark_done("Buy milk")
    if updated is None:
        out("Updated one: not found")
    else:
        out(f"Updated one: id={updated.id} -> is_done=true")

    updated_many = service.mark_done_matching("Read", "Write")
    out(f"Updated many: {len(updated_many)}")

    deleted = service.delete_by_title("Do workout")
    if deleted is not None:
        out(f"Deleted one: id={deleted.id}")

    deleted_many = service.delete_done()
    out(f"Deleted many (is_done=true): {len(deleted_many)}")

    out(f"Count: {service.count()}")

    service.add_many([("Task A", False), ("Task B", False), ("Task C", True)])

    first_open = service.first_open()
    if first_open is None:
        out("First open: not found")
    else:
        out(f"First open: id={first_open.id}, title={first_open.title}")

    open_items = [TodoOut.model_validate(t) for t in service.list_open()]
    out(f"Open items ({len(open_items)}): " + ", ".join(t.label() for t in open_items))
