"""
Constantes globales pour Hanimeta.

Ce module contient :
- Les descripteurs des catalogues supportes (Hanime, DLsite)
- Les chemins publics et le prefixe d'API de la passerelle
- Les listes utilisees pour nettoyer les titres
"""

from hanimeta.core.value_objects import CatalogDescriptor
from hanimeta.utils.ids import (
    DLSITE_MANIAX_TEMPLATE,
    build_dlsite_canonical_url,
    extract_dlsite_id,
    extract_hanime_id,
)

HANIME = CatalogDescriptor(
    key="Hanime",
    api_path="hanime",
    provider_name="Hanime",
    url_template="https://hanime1.me/watch?v={0}",
    id_extractor=extract_hanime_id,
)

DLSITE = CatalogDescriptor(
    key="DLsite",
    api_path="dlsite",
    provider_name="DLsite",
    url_template=DLSITE_MANIAX_TEMPLATE,
    id_extractor=extract_dlsite_id,
    url_builder=build_dlsite_canonical_url,
)

# Catalogues indexes par segment d'API
CATALOGS: dict[str, CatalogDescriptor] = {
    HANIME.api_path: HANIME,
    DLSITE.api_path: DLSITE,
}

# Passerelle backend
API_PREFIX = "/api"
PUBLIC_PATHS = frozenset({"/", "/health"})
SEARCH_DEFAULT_MAX = 12
SEARCH_HARD_MAX = 50

# Extensions video retirees des titres
VIDEO_EXTENSIONS = frozenset({
    ".mkv",
    ".mp4",
    ".avi",
    ".wmv",
    ".flv",
    ".mov",
    ".ts",
    ".mpg",
    ".mpeg",
    ".m4v",
    ".webm",
})

# Noms de sites et mentions parasites frequents dans les noms de fichiers
BLACKLIST_TOKENS = (
    "hanime1.me",
    "hanime",
    "h動漫",
    "裏番",
    "線上看",
    "線上觀看",
    "線上",
    "中文字幕",
    "dlsite.com",
    "dlsite",
)
