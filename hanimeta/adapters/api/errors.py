"""
Erreurs du client de metadonnees.

Toutes derivent de MetadataFetchError, ce qui permet a l'appelant de
distinguer un echec (a relancer ou signaler) d'une absence legitime de
metadonnees (None).
"""

from typing import Optional


class MetadataFetchError(Exception):
    """Echec de recuperation aupres du backend."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{message} ({url})")


class BackendUnavailableError(MetadataFetchError):
    """Backend injoignable (erreur de transport)."""

    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        self.reason = reason
        super().__init__(url, f"Backend injoignable: {reason or 'erreur de transport'}")


class BackendTimeoutError(BackendUnavailableError):
    """Pas de reponse dans le delai configure."""

    def __init__(self, url: str, timeout: float) -> None:
        self.timeout = timeout
        MetadataFetchError.__init__(self, url, f"Delai depasse apres {timeout:g}s")
        self.reason = "timeout"


class BackendStatusError(MetadataFetchError):
    """Reponse HTTP hors 2xx."""

    def __init__(self, url: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(url, f"Statut HTTP {status_code}")


class MalformedResponseError(MetadataFetchError):
    """Corps illisible : JSON invalide, pas un objet, ou titre absent."""
