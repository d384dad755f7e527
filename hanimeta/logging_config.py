"""
Configuration du logging de l'application via loguru.

Fournit un logging structure avec :
- Sortie console : lisible par l'humain, coloree, pour la surveillance en temps reel
- Sortie fichier (optionnelle) : serialisee en JSON, avec rotation

Les logs de l'adaptateur hote sont coupes tant que le logging du plugin
n'est pas active (equivalent du EnableLogging de la configuration hote).
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

PLUGIN_LOGGER_NAME = "hanimeta.adapters.jellyfin"


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation_size: str = "10 MB",
    retention_count: int = 5,
    plugin_logging: bool = True,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console
        log_file : Chemin vers le fichier de log JSON (None = pas de fichier)
        rotation_size : Taille maximale du fichier avant rotation
        retention_count : Nombre de fichiers rotatifs a conserver
        plugin_logging : Si False, les logs de l'adaptateur hote sont desactives
    """
    # Supprime le handler par defaut
    logger.remove()

    # Handler console - lisible par l'humain
    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format="{message}",
            serialize=True,  # Sortie JSON
            rotation=rotation_size,
            retention=retention_count,
            compression="zip",
            enqueue=True,  # Thread-safe
        )

    if plugin_logging:
        logger.enable(PLUGIN_LOGGER_NAME)
    else:
        logger.disable(PLUGIN_LOGGER_NAME)

    logger.debug("Logging configure", log_file=str(log_file), level=log_level)
