"""
Enveloppe JSON des reponses de la passerelle.

Toutes les routes /api repondent {"success": ..., "message": ..., "data": ...}.
"""

from typing import Any, Optional

from pydantic import BaseModel


class ApiResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None

    @classmethod
    def ok(cls, data: Any, message: Optional[str] = None) -> "ApiResponse":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str) -> "ApiResponse":
        return cls(success=False, message=message)


class ServiceInfo(BaseModel):
    """Contenu de la route racine."""

    name: str
    version: str
    authEnabled: bool
    catalogs: list[str]
