"""
➡️ But : Décrire la table `todos` sous forme de données simples et la créer au démarrage du store.

TODOS_SCHEMA : colonnes attendues (nom, type SQL, contraintes).

ensure_schema() : crée la table si elle n'existe pas, puis vérifie la table réelle contre TODOS_SCHEMA.

describe_table() : relit les colonnes depuis la base (via l'inspecteur SQLAlchemy).

🔹 Avantages :

Idempotent : on peut l'appeler à chaque démarrage.

Une table existante mais incomplète est détectée tout de suite, pas à la première requête.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlmodel import SQLModel

from app.core.errors import PersistenceError, StoreConnectionError
from app.core.logger import logger
from app.db.models.todos import TITLE_MAX_LENGTH, Todo


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    nullable: bool = True
    primary_key: bool = False
    indexed: bool = False
    max_length: Optional[int] = None


@dataclass(frozen=True)
class TableSpec:
    name: str
    columns: Tuple[ColumnSpec, ...]

    def column(self, name: str) -> ColumnSpec:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(name)


TODOS_SCHEMA = TableSpec(
    name="todos",
    columns=(
        ColumnSpec("id", nullable=False, primary_key=True),
        ColumnSpec("created_at", nullable=False),
        ColumnSpec("title", nullable=False, max_length=TITLE_MAX_LENGTH),
        ColumnSpec("is_done", nullable=False, indexed=True),
    ),
)


def describe_table(engine: Engine, name: str = TODOS_SCHEMA.name) -> Dict[str, Dict[str, Any]]:
    """
    Colonnes réelles de la table : {nom: {"nullable", "primary_key", "indexed", "max_length"}}.
    Retourne {} si la table n'existe pas.
    """
    insp = inspect(engine)
    if not insp.has_table(name):
        return {}

    pk_cols = set(insp.get_pk_constraint(name).get("constrained_columns") or [])
    indexed_cols = {
        col
        for index in insp.get_indexes(name)
        for col in index.get("column_names") or []
        if col is not None
    }
    return {
        col["name"]: {
            "nullable": bool(col["nullable"]),
            "primary_key": col["name"] in pk_cols,
            "indexed": col["name"] in indexed_cols,
            "max_length": getattr(col["type"], "length", None),
        }
        for col in insp.get_columns(name)
    }


def _check_table(engine: Engine, spec: TableSpec) -> None:
    live = describe_table(engine, spec.name)
    missing = [col.name for col in spec.columns if col.name not in live]
    if missing:
        raise PersistenceError(f"Table {spec.name!r} is missing columns: {', '.join(missing)}")

    for col in spec.columns:
        if col.primary_key and not live[col.name]["primary_key"]:
            raise PersistenceError(f"Column {spec.name}.{col.name} is not the primary key")
        if col.indexed and not live[col.name]["indexed"]:
            raise PersistenceError(f"Column {spec.name}.{col.name} is not indexed")
        # une clé primaire est implicitement NOT NULL, quel que soit le DDL
        if not col.primary_key and not col.nullable and live[col.name]["nullable"]:
            raise PersistenceError(f"Column {spec.name}.{col.name} must be NOT NULL")
        if col.max_length is not None and live[col.name]["max_length"] != col.max_length:
            raise PersistenceError(
                f"Column {spec.name}.{col.name} must be limited to {col.max_length} characters"
            )


def ensure_schema(engine: Engine) -> None:
    """
    Crée la table `todos` (clé primaire sur id, index sur is_done) si elle n'existe pas.
    Lève StoreConnectionError si la base est injoignable.
    """
    try:
        with engine.connect():
            pass
    except DBAPIError as exc:
        logger.error("Cannot connect to %s: %s", engine.url.render_as_string(), exc)
        raise StoreConnectionError(f"Cannot connect to database {engine.url.database!r}") from exc

    try:
        SQLModel.metadata.create_all(engine, tables=[Todo.__table__])
    except SQLAlchemyError as exc:
        logger.error("Schema creation failed: %s", exc)
        raise PersistenceError(f"Cannot create table {TODOS_SCHEMA.name!r}") from exc

    _check_table(engine, TODOS_SCHEMA)
