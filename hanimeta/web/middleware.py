"""
Controle du jeton partage de la passerelle.

Etats d'une requete :
- EXEMPT : aucun jeton configure, ou chemin public ("/" et "/health")
- ACCEPTED : chemin /api et header identique au jeton configure
- MISSING / INVALID : chemin /api, header absent/vide ou different -> 401
- Tout autre chemin passe sans controle

La comparaison est exacte (sensible a la casse, sans suppression des
espaces). Le jeton n'apparait jamais dans les logs.
"""

from enum import Enum
from typing import Optional

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from hanimeta.config import DEFAULT_TOKEN_HEADER
from hanimeta.utils.constants import API_PREFIX, PUBLIC_PATHS


class GateDecision(str, Enum):
    EXEMPT = "exempt"
    ACCEPTED = "accepted"
    MISSING = "missing"
    INVALID = "invalid"
    PASSTHROUGH = "passthrough"


REJECTION_MESSAGES = {
    GateDecision.MISSING: "Missing authentication token",
    GateDecision.INVALID: "Invalid authentication token",
}


def _is_api_path(path: str) -> bool:
    lowered = path.lower()
    return lowered == API_PREFIX or lowered.startswith(API_PREFIX + "/")


def authenticate(path: str, presented: Optional[str], expected: Optional[str]) -> GateDecision:
    """Decide du sort d'une requete sans effet de bord."""
    if not expected or not expected.strip():
        return GateDecision.EXEMPT
    if path in PUBLIC_PATHS:
        return GateDecision.EXEMPT
    if not _is_api_path(path):
        return GateDecision.PASSTHROUGH
    if presented is None or not presented.strip():
        return GateDecision.MISSING
    if presented != expected:
        return GateDecision.INVALID
    return GateDecision.ACCEPTED


class TokenAuthenticationMiddleware(BaseHTTPMiddleware):
    """Refuse les requetes /api sans le bon jeton quand un jeton est configure."""

    def __init__(
        self,
        app: ASGIApp,
        auth_token: Optional[str] = None,
        header_name: str = DEFAULT_TOKEN_HEADER,
    ) -> None:
        super().__init__(app)
        self._auth_token = auth_token
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        decision = authenticate(
            request.url.path,
            request.headers.get(self._header_name),
            self._auth_token,
        )
        remote = request.client.host if request.client else "unknown"

        if decision in REJECTION_MESSAGES:
            logger.warning(
                "Requete API refusee",
                reason=decision.value,
                remote=remote,
                path=request.url.path,
            )
            return PlainTextResponse(REJECTION_MESSAGES[decision], status_code=401)

        if decision is GateDecision.ACCEPTED:
            logger.debug("Requete API authentifiee", remote=remote)

        return await call_next(request)
