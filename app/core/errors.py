"""
➡️ But : Définir les erreurs remontées par la couche de persistance.

StoreConnectionError : base injoignable ou authentification refusée.

PersistenceError : contrainte violée ou requête en échec une fois connecté.

Aucune n'est interceptée par le store ni par le service : elles remontent jusqu'au script.
"""


class StoreError(Exception):
    """Base commune des erreurs du store."""


class StoreConnectionError(StoreError, ConnectionError):
    pass


class PersistenceError(StoreError):
    pass
