"""
Extraction et normalisation des IDs natifs des catalogues.

- DLsite : codes RJ/VJ (ex: RJ123456), exacts ou inclus dans une URL/un texte
- Hanime : nombre d'au moins 4 chiffres, ou parametre v= d'une URL watch
"""

import re
from typing import Optional

_DLSITE_EXACT = re.compile(r"^(RJ|VJ)\d+$", re.IGNORECASE)
_DLSITE_LOOSE = re.compile(r"(RJ|VJ)\d{3,}", re.IGNORECASE)
_HANIME_NUMBER = re.compile(r"^\d{4,}$")
_HANIME_URL = re.compile(r"[?&]v=(\d+)")

DLSITE_MANIAX_TEMPLATE = "https://www.dlsite.com/maniax/work/=/product_id/{0}.html"
DLSITE_PRO_TEMPLATE = "https://www.dlsite.com/pro/work/=/product_id/{0}.html"


def extract_dlsite_id(value: Optional[str]) -> Optional[str]:
    """
    Extrait un ID produit DLsite, en majuscules.

    Args:
        value: "RJ123456", "rj123456", ou une URL contenant le code

    Returns:
        L'ID normalise, ou None si aucun code RJ/VJ n'est trouve
    """
    if value is None or not value.strip():
        return None

    candidate = value.strip().upper()
    if _DLSITE_EXACT.match(candidate):
        return candidate

    match = _DLSITE_LOOSE.search(candidate)
    if match:
        return match.group(0).upper()
    return None


def extract_hanime_id(value: Optional[str]) -> Optional[str]:
    """
    Extrait un ID Hanime numerique.

    Args:
        value: "86994" ou "https://hanime1.me/watch?v=86994"

    Returns:
        L'ID, ou None
    """
    if value is None or not value.strip():
        return None

    candidate = value.strip()
    if _HANIME_NUMBER.match(candidate):
        return candidate

    match = _HANIME_URL.search(candidate)
    if match:
        return match.group(1)
    return None


def build_dlsite_canonical_url(product_id: str, prefer_maniax: bool = True) -> str:
    """
    Construit l'URL canonique d'un produit DLsite.

    Les IDs VJ vivent dans la section "pro", les IDs RJ dans "maniax" ;
    prefer_maniax ne sert que pour les IDs ambigus.
    """
    product_id = product_id.strip().upper()

    if product_id.startswith("VJ"):
        template = DLSITE_PRO_TEMPLATE
    elif product_id.startswith("RJ"):
        template = DLSITE_MANIAX_TEMPLATE
    else:
        template = DLSITE_MANIAX_TEMPLATE if prefer_maniax else DLSITE_PRO_TEMPLATE

    return template.format(product_id)
