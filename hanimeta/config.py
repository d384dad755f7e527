"""
Configuration de l'application via pydantic-settings.

Deux jeux de parametres coexistent :
- PluginSettings : cote hote (client de metadonnees), prefixe HANIMETA_
- ServiceSettings : cote backend (passerelle HTTP), prefixe SCRAPER_

Les deux sont charges une seule fois au demarrage et figes ensuite
(modeles frozen), et peuvent etre fournis via un fichier .env.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env a la racine du projet (parent de hanimeta/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

DEFAULT_TOKEN_HEADER = "X-API-Token"


class TagMappingMode(str, Enum):
    """Destination des tags du catalogue sur l'entite hote."""

    TAGS = "tags"
    GENRES = "genres"


class PluginSettings(BaseSettings):
    """Parametres du client de metadonnees (cote serveur multimedia).

    Tous les parametres peuvent etre surcharges via des variables
    d'environnement avec le prefixe HANIMETA_.
    Exemple : HANIMETA_BACKEND_URL=http://192.168.1.10:8585
    """

    model_config = SettingsConfigDict(
        env_prefix="HANIMETA_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    backend_url: str = Field(default="http://127.0.0.1:8585")
    api_token: Optional[str] = Field(default=None)
    token_header_name: str = Field(default=DEFAULT_TOKEN_HEADER)
    request_timeout_seconds: int = Field(default=60, ge=1)
    max_search_results: int = Field(default=10, ge=1, le=50)

    # Logging du plugin (desactive par defaut, comme dans l'hote)
    enable_logging: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)

    tag_mapping_mode: TagMappingMode = Field(default=TagMappingMode.TAGS)

    @field_validator("backend_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Supprime le / final pour construire les URLs sans double slash."""
        return v.strip().rstrip("/")

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Etend ~ vers le repertoire home dans les chemins."""
        if v in (None, ""):
            return None
        return Path(v).expanduser()

    @property
    def has_token(self) -> bool:
        """Vrai si un jeton doit accompagner les requetes."""
        return bool(self.api_token and self.api_token.strip())

    @property
    def is_valid(self) -> bool:
        """Verifie qu'une URL de backend exploitable est configuree."""
        return self.backend_url.startswith(("http://", "https://"))


class ServiceSettings(BaseSettings):
    """Parametres de la passerelle backend.

    Prefixe SCRAPER_, par exemple SCRAPER_PORT=9090 ou
    SCRAPER_AUTH_TOKEN=secret. Un jeton vide desactive l'authentification.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRAPER_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    port: int = Field(default=8585, ge=1, le=65535)
    host: str = Field(default="0.0.0.0")
    auth_token: Optional[str] = Field(default=None)
    token_header_name: str = Field(default=DEFAULT_TOKEN_HEADER)
    enable_detailed_logging: bool = Field(default=False)
    max_concurrent_requests: int = Field(default=10, ge=1)
    request_timeout_seconds: int = Field(default=60, ge=1)

    # Cache des details (None = repertoire temporaire)
    cache_dir: Optional[Path] = Field(default=None)
    cache_ttl_seconds: int = Field(default=7 * 24 * 60 * 60, ge=1)

    log_file: Optional[Path] = Field(default=None)

    @field_validator("log_file", "cache_dir", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Etend ~ vers le repertoire home dans les chemins."""
        if v in (None, ""):
            return None
        return Path(v).expanduser()

    @property
    def auth_enabled(self) -> bool:
        """Le controle par jeton est actif des qu'un jeton non vide est defini."""
        return bool(self.auth_token and self.auth_token.strip())

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.enable_detailed_logging else "INFO"
