"""
➡️ But : assembler toutes les pièces du puzzle.

Charge les Settings (CONNECTION_STRING, LOG_LEVEL...).

Ouvre le TodoStore (engine + session), crée la table si besoin.

Déroule le scénario CRUD, puis libère la connexion, y compris en cas d'erreur.

🔹 Avantages :

Point unique d’exécution : python -m scripts.demo (ou `todo-demo`).

Code de sortie : 0 si tout s'est bien passé, 1 sur erreur du store.
"""

import sys

from app.core.config import Settings
from app.core.errors import StoreError
from app.core.logger import configure_logging
from app.db.repositories.todos import TodoStore
from app.db.session import backend_label
from app.features.todos.demo import run_demo
from app.features.todos.services import TodoService


def main(settings: Settings | None = None) -> int:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        with TodoStore.from_settings(settings) as store:
            print(f"Connecting to {backend_label(store.engine)}...")
            store.ensure_schema()
            run_demo(TodoService(store))
    except StoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
