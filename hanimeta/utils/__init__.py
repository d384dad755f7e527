"""Utilitaires partages : constantes, extraction d'IDs, nettoyage de titres."""
