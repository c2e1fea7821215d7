"""
Foundation processors: languages, regions, generations, version groups
"""

from typing import Any, List

from ingestion.base import GapFillingProcessor, SeedProcessor
from ingestion.oracle import RelationshipCheck
from ingestion.registry import EntityKind
from models.base import SeedMode
from models.language import (
    Generation, Language, LanguageName, Region, Version, VersionGroup, VersionName
)
from schemas.resources import (
    GenerationResource,
    LanguageResource,
    NamedResource,
    RegionResource,
    VersionGroupResource,
    VersionResource,
)
import logging

logger = logging.getLogger(__name__)


class LanguageProcessor(GapFillingProcessor):
    """
    Languages are written first; their localized names reference other
    languages, so names are written in a post-pass once every language exists.
    A language without names is fetched again on the next run.
    """

    endpoint = "language"
    kind = EntityKind.LANGUAGE
    relationship_checks = (
        RelationshipCheck.on(LanguageName, "language_id"),
    )
    progress_log_interval = 20

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        language = await self.fetch(reference.url, mode, LanguageResource)
        await self.engine.upsert_record(Language, language.id, {
            "name": language.name,
            "iso639": language.iso639,
            "iso3166": language.iso3166,
            "official": language.official,
        })
        return language

    async def post_process(self, results: List[LanguageResource]) -> None:
        written = 0
        for language in results:
            written += await self.engine.add_joined_record_data(
                LanguageName,
                "language_id",
                language.id,
                language.names,
                ["name"],
                secondary_key="local_language_id",
                reference_field="language",
            )
        logger.info(f"Wrote {written} language names for {len(results)} languages")


class RegionProcessor(SeedProcessor):
    endpoint = "region"
    kind = EntityKind.REGION
    progress_log_interval = 10

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        region = await self.fetch(reference.url, mode, RegionResource)
        await self.engine.upsert_record(Region, region.id, {"name": region.name})
        return region.id


class GenerationProcessor(SeedProcessor):
    endpoint = "generation"
    kind = EntityKind.GENERATION
    progress_log_interval = 10

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        generation = await self.fetch(reference.url, mode, GenerationResource)
        main_region_id = await self.existing_reference(EntityKind.REGION, generation.main_region)
        if generation.main_region is not None and main_region_id is None:
            logger.warning(f"Generation {generation.name}: main region not found, leaving it empty")

        await self.engine.upsert_record(Generation, generation.id, {
            "name": generation.name,
            "main_region_id": main_region_id,
        })
        return generation.id


class VersionGroupProcessor(GapFillingProcessor):
    """
    Version groups together with their versions and version names; a group
    counts as done once a version and a version name are stored for it.
    """

    endpoint = "version-group"
    kind = EntityKind.VERSION_GROUP
    relationship_checks = (
        RelationshipCheck.on(Version, "version_group_id"),
        RelationshipCheck.through(VersionName, "version_id", Version, "version_group_id"),
    )
    progress_log_interval = 10
    timeout_seconds = 300

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        group = await self.fetch(reference.url, mode, VersionGroupResource)
        generation_id = await self.require_reference(
            EntityKind.GENERATION, group.generation, "generation", group.name
        )

        await self.engine.upsert_record(VersionGroup, group.id, {
            "name": group.name,
            "order": group.order,
            "generation_id": generation_id,
        })

        for version_ref in group.versions:
            version = await self.fetch(version_ref.url, mode, VersionResource)
            await self.engine.upsert_record(Version, version.id, {
                "name": version.name,
                "version_group_id": group.id,
            })
            await self.engine.add_joined_record_data(
                VersionName, "version_id", version.id, version.names, ["name"]
            )

        return group.id
