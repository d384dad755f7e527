"""
Fonctions utilitaires partagees.

- clean_title : nettoyage d'un nom de fichier/titre avant recherche
- to_float32 : conversion double -> simple precision
"""

import re
import struct
from typing import Optional

from hanimeta.utils.constants import BLACKLIST_TOKENS, VIDEO_EXTENSIONS

_EXTENSION_RE = re.compile(
    r"\.(" + "|".join(ext.lstrip(".") for ext in sorted(VIDEO_EXTENSIONS)) + r")$",
    re.IGNORECASE,
)

# Paires de delimiteurs retirees avec leur contenu, y compris imbriques
_BRACKET_PATTERNS = (
    re.compile(r"\[[^\[\]]*\]", re.DOTALL),
    re.compile(r"\([^()]*\)", re.DOTALL),
    re.compile(r"\{[^{}]*\}", re.DOTALL),
    re.compile(r"【[^【】]*】", re.DOTALL),
    re.compile(r"（[^（）]*）", re.DOTALL),
    re.compile(r"<[^<>]*>", re.DOTALL),
)
_STRAY_BRACKETS_RE = re.compile(r"[\[\](){}【】（）<>]")
_QUALITY_RE = re.compile(
    r"\b(?:4k|8k|hd|uhd|[0-9]{3,4}\s*p|x264|x265|h264|hevc|bluray|bdrip|"
    r"webrip|web[- ]?dl|hdrip|dvdrip|brrip)\b",
    re.IGNORECASE,
)
# Tout sauf lettres, chiffres, espaces, point, tiret et underscore
_SYMBOLS_RE = re.compile(r"[^\w\s.\-]")
_UNICODE_DASH_RE = re.compile(r"[\u2010-\u2015\u2212\ufe58\ufe63\uff0d]+")
_LOOSE_HYPHEN_RE = re.compile(r"(?<![^\W\d_])-|-(?![^\W\d_])")
_SPACES_RE = re.compile(r"\s+")


def clean_title(value: Optional[str]) -> str:
    """
    Nettoie un nom de fichier ou un titre pour la recherche.

    Retire l'extension video, le contenu entre crochets/parentheses,
    les noms de sites, les labels de qualite et la ponctuation parasite.
    Les tirets ne sont conserves qu'entre deux lettres.

    Args:
        value: Nom brut (ex: "[Hanime] Titre - 01 (1080p).mp4")

    Returns:
        Titre nettoye (chaine vide si rien d'exploitable)
    """
    if value is None or not value.strip():
        return ""

    s = _EXTENSION_RE.sub("", value.strip())

    changed = True
    while changed:
        changed = False
        for pattern in _BRACKET_PATTERNS:
            replaced = pattern.sub(" ", s)
            if replaced != s:
                s = replaced
                changed = True

    s = _STRAY_BRACKETS_RE.sub(" ", s)

    for token in BLACKLIST_TOKENS:
        s = re.sub(re.escape(token), "", s, flags=re.IGNORECASE)

    s = _QUALITY_RE.sub("", s)
    s = _SYMBOLS_RE.sub(" ", s)
    s = s.replace("_", " ")
    s = _UNICODE_DASH_RE.sub(" ", s)
    s = _LOOSE_HYPHEN_RE.sub(" ", s)

    return _SPACES_RE.sub(" ", s).strip()


def to_float32(value: float) -> float:
    """Arrondit un double IEEE-754 a la simple precision."""
    return struct.unpack("f", struct.pack("f", value))[0]
