"""
➡️ But : Construire l'engine SQLAlchemy à partir des Settings.

build_engine() : connexion à la base décrite par CONNECTION_STRING (PostgreSQL par défaut, SQLite en test).

Pas d'engine global : c'est le TodoStore qui possède l'engine et le libère à la fermeture.

🔹 Avantages :

Un seul endroit pour gérer les options de connexion.

Chaque test peut ouvrir sa propre base sans toucher à un état partagé.
"""

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from app.core.config import Settings


def build_engine(url: str, *, echo: bool = False) -> Engine:
    is_sqlite = make_url(url).get_backend_name() == "sqlite"

    connect_args: Dict[str, Any] = {}
    if is_sqlite:
        connect_args["check_same_thread"] = False

    return create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
    )


def engine_from_settings(settings: Settings) -> Engine:
    return build_engine(settings.database_url, echo=bool(settings.SQL_ECHO))


def backend_label(engine: Engine) -> str:
    """Nom lisible du SGBD, pour la ligne "Connecting to ..." du script."""
    labels = {"postgresql": "PostgreSQL", "sqlite": "SQLite", "mysql": "MySQL"}
    name = engine.url.get_backend_name()
    return labels.get(name, name)
