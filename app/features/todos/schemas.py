"""
➡️ But : Définir les formats d’entrée/sortie d'une tâche (couche validation).

TodoIn → ce qui est accepté à l'écriture (validé avant chaque save)

TodoOut → ce qui est affiché

Sépare les modèles "de stockage" (ORM) de ceux "de validation".

🔹 Avantages :

Validation automatique (titre obligatoire, 200 caractères max).

Les erreurs sont détectées avant d'envoyer quoi que ce soit à la base.
"""

from datetime import datetime
from pydantic import BaseModel, Field

from app.db.models.todos import TITLE_MAX_LENGTH


class TodoIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, examples=["Buy milk"])
    is_done: bool = Field(False, examples=[False])


class TodoOut(BaseModel):
    id: int
    title: str
    is_done: bool
    created_at: datetime

    model_config = {"from_attributes": True}

    def label(self) -> str:
        return f"#{self.id}:{self.title}"
