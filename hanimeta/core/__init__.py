"""
Couche domaine (core).

Contient les entites, ports (interfaces abstraites) et objets valeur.
Cette couche n'a AUCUNE dependance vers l'infrastructure (HTTP, frameworks).

Sous-packages :
- entities/ : Entites cote hote (Movie, PersonInfo)
- ports/ : Interfaces abstraites (client de metadonnees, scrapers backend)
- value_objects/ : Objets valeur immutables (CatalogDescriptor)
"""
