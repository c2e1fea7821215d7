"""
Pydantic schemas for remote catalog resources.

This package defines one Pydantic model per resource kind fetched from the
catalog. Payloads are validated at the transport boundary, so every entity
processor consumes a typed structure rather than a raw dictionary.

Schemas:
    resources: Resource references, collection pages, localized entries and
        one schema per resource kind (language, type, move, species, ...)

Features:
    - Automatic data validation and type coercion
    - Unknown keys ignored, optional catalog fields defaulted
    - Resource references expose their numeric id parsed from the url

Usage:
    from schemas.resources import NamedResource, PokemonSpeciesResource

Example:
    ref = NamedResource(name="bulbasaur", url="https://pokeapi.co/api/v2/pokemon/1/")
    assert ref.id == 1

    species = PokemonSpeciesResource.model_validate(payload)
    for name in species.names:
        print(name.language.id, name.name)
"""

from schemas.resources import (
    NamedResource,
    ResourceList,
    extract_id_from_url,
)

__all__ = [
    "NamedResource",
    "ResourceList",
    "extract_id_from_url",
]
