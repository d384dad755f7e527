"""
Redirection vers la page publique DLsite d'une oeuvre.

Permet de pointer les liens externes vers la passerelle, qui choisit la
section (maniax ou pro) selon le prefixe de l'ID.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, RedirectResponse
from loguru import logger

from hanimeta.utils.ids import build_dlsite_canonical_url, extract_dlsite_id

router = APIRouter()


@router.get("/r/dlsite/{external_id}")
async def dlsite_redirect(external_id: str):
    product_id = extract_dlsite_id(external_id)
    if product_id is None:
        logger.warning("Redirection DLsite impossible", id=external_id)
        return PlainTextResponse("Not Found", status_code=404)
    return RedirectResponse(build_dlsite_canonical_url(product_id), status_code=302)
