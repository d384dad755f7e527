"""Routes de la passerelle."""
