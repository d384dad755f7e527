"""
Objets valeur decrivant les catalogues externes.

Un seul composant parametre gere tous les catalogues : ce qui differe entre
Hanime et DLsite (cle, segment d'API, modele d'URL, extraction d'ID) tient
dans un CatalogDescriptor.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

IdExtractor = Callable[[Optional[str]], Optional[str]]
UrlBuilder = Callable[[str], str]


def _no_extraction(value: Optional[str]) -> Optional[str]:
    return None


@dataclass(frozen=True)
class CatalogDescriptor:
    """
    Description d'un catalogue externe.

    Attributs :
        key : Cle d'ID externe cote hote (ex: "Hanime", "DLsite")
        api_path : Segment d'URL du backend (ex: "hanime" -> /api/hanime/{id})
        provider_name : Nom affiche du fournisseur
        url_template : Modele d'URL publique avec un seul placeholder {0}
        id_extractor : Fonction extrayant un ID natif d'un texte libre
        url_builder : Constructeur d'URL specifique (remplace url_template)
    """

    key: str
    api_path: str
    provider_name: str
    url_template: str
    id_extractor: IdExtractor = field(default=_no_extraction, compare=False)
    url_builder: Optional[UrlBuilder] = field(default=None, compare=False)

    def build_url(self, external_id: str) -> str:
        """Construit l'URL publique canonique pour un ID natif."""
        if self.url_builder is not None:
            return self.url_builder(external_id)
        return self.url_template.format(external_id)

    def extract_id(self, value: Optional[str]) -> Optional[str]:
        """Extrait un ID natif (nom de fichier, URL...) ou None."""
        return self.id_extractor(value)
