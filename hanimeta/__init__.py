"""
Hanimeta - Metadonnees Hanime / DLsite pour serveur multimedia.

Ce package fournit le client de metadonnees execute cote hote et la
passerelle HTTP (backend) qui protege les scrapers par jeton.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (mapping, stockage des URLs externes)
- adapters/ : Couche infrastructure (client API, adaptateur hote, CLI)
- web/ : Service backend (FastAPI + middleware d'authentification)
"""

__version__ = "1.2.0"
