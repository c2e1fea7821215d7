"""
Shared processor shape for small named vocabularies
"""

from typing import Any, Dict, Optional, Type

from ingestion.base import SeedProcessor
from models.base import Base, SeedMode
from schemas.resources import NamedResource, NamedVocabulary


class VocabularyProcessor(SeedProcessor):
    """
    Processor for kinds that are a named row plus localized names and,
    optionally, descriptions.

    Subclasses set the model/schema attributes and override
    ``record_fields`` / ``write_extras`` for anything beyond that.

    Attributes:
        model: Primary table
        schema: Resource schema
        owner_key: Column naming the owner in localized tables
        name_model: Localized names table (None: no names)
        description_model: Localized descriptions table (None: no descriptions)
    """

    model: Type[Base] = None
    schema: Type[NamedVocabulary] = NamedVocabulary
    owner_key: str = ""
    name_model: Optional[Type[Base]] = None
    description_model: Optional[Type[Base]] = None
    progress_log_interval = 10

    async def record_fields(self, resource: Any) -> Dict[str, Any]:
        return {"name": resource.name}

    async def write_extras(self, resource: Any, mode: SeedMode) -> None:
        pass

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        resource = await self.fetch(reference.url, mode, self.schema)
        await self.engine.upsert_record(self.model, resource.id, await self.record_fields(resource))

        if self.name_model is not None:
            await self.engine.add_joined_record_data(
                self.name_model, self.owner_key, resource.id, resource.names, ["name"]
            )
        if self.description_model is not None:
            await self.engine.add_joined_record_data(
                self.description_model,
                self.owner_key,
                resource.id,
                resource.descriptions,
                ["description"]
            )

        await self.write_extras(resource, mode)
        return resource.id
