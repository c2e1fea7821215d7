"""
Location, location-area and pal-park processors
"""

from typing import Any, Dict

from ingestion.base import GapFillingProcessor
from ingestion.oracle import RelationshipCheck
from ingestion.processors.common import VocabularyProcessor
from ingestion.registry import EntityKind
from models.base import SeedMode
from models.location import (
    Location, LocationArea, LocationAreaName, LocationName, PalParkArea,
    PalParkAreaName, PalParkEncounter
)
from schemas.resources import LocationAreaResource, LocationResource, NamedResource, PalParkAreaResource
import logging

logger = logging.getLogger(__name__)


class LocationProcessor(VocabularyProcessor):
    endpoint = "location"
    kind = EntityKind.LOCATION
    model = Location
    schema = LocationResource
    owner_key = "location_id"
    name_model = LocationName
    progress_log_interval = 100
    timeout_seconds = 1200

    async def record_fields(self, resource: LocationResource) -> Dict[str, Any]:
        return {
            "name": resource.name,
            "region_id": await self.existing_reference(EntityKind.REGION, resource.region),
        }


class LocationAreaProcessor(VocabularyProcessor):
    endpoint = "location-area"
    kind = EntityKind.LOCATION_AREA
    model = LocationArea
    schema = LocationAreaResource
    owner_key = "location_area_id"
    name_model = LocationAreaName
    progress_log_interval = 100
    timeout_seconds = 1200

    async def record_fields(self, resource: LocationAreaResource) -> Dict[str, Any]:
        location_id = await self.require_reference(
            EntityKind.LOCATION, resource.location, "location", resource.name
        )
        return {
            "name": resource.name,
            "game_index": resource.game_index,
            "location_id": location_id,
        }


class PalParkAreaProcessor(GapFillingProcessor):
    """
    Pal park areas run before species, so their encounters are only written
    for species already stored. An area without encounters is picked up
    again by a later run.
    """

    endpoint = "pal-park-area"
    kind = EntityKind.PAL_PARK_AREA
    progress_log_interval = 5
    relationship_checks = (
        RelationshipCheck.on(PalParkEncounter, "pal_park_area_id"),
    )

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        area = await self.fetch(reference.url, mode, PalParkAreaResource)
        await self.engine.upsert_record(PalParkArea, area.id, {"name": area.name})
        await self.engine.add_joined_record_data(
            PalParkAreaName, "pal_park_area_id", area.id, area.names, ["name"]
        )
        encounters = await self.engine.add_joined_record_data(
            PalParkEncounter,
            "pal_park_area_id",
            area.id,
            area.pokemon_encounters,
            ["base_score", "rate"],
            secondary_key="pokemon_species_id"
        )
        logger.debug(f"Pal park area {area.name}: {encounters} encounters written")
        return area.id
