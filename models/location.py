from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from models.base import Base


# ============================================================================
# Locations
# ============================================================================

class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(200), nullable=False)
    region_id = Column(Integer, ForeignKey("regions.id"), nullable=True)


class LocationName(Base):
    __tablename__ = "location_names"

    location_id = Column(Integer, ForeignKey("locations.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class LocationArea(Base):
    __tablename__ = "location_areas"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(200), nullable=False)
    game_index = Column(Integer, nullable=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)


class LocationAreaName(Base):
    __tablename__ = "location_area_names"

    location_area_id = Column(Integer, ForeignKey("location_areas.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class PalParkArea(Base):
    __tablename__ = "pal_park_areas"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class PalParkAreaName(Base):
    __tablename__ = "pal_park_area_names"

    pal_park_area_id = Column(Integer, ForeignKey("pal_park_areas.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class PalParkEncounter(Base):
    __tablename__ = "pal_park_encounters"

    pokemon_species_id = Column(Integer, ForeignKey("pokemon_species.id"), primary_key=True)
    pal_park_area_id = Column(Integer, ForeignKey("pal_park_areas.id"), primary_key=True)
    base_score = Column(Integer, nullable=False)
    rate = Column(Integer, nullable=False)


# ============================================================================
# Encounters
# ============================================================================

class EncounterMethod(Base):
    __tablename__ = "encounter_methods"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    order = Column(Integer, nullable=True)


class EncounterMethodName(Base):
    __tablename__ = "encounter_method_names"

    encounter_method_id = Column(Integer, ForeignKey("encounter_methods.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class EncounterCondition(Base):
    __tablename__ = "encounter_conditions"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class EncounterConditionName(Base):
    __tablename__ = "encounter_condition_names"

    encounter_condition_id = Column(Integer, ForeignKey("encounter_conditions.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class EncounterConditionValue(Base):
    __tablename__ = "encounter_condition_values"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    encounter_condition_id = Column(Integer, ForeignKey("encounter_conditions.id"), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)


class EncounterConditionValueName(Base):
    __tablename__ = "encounter_condition_value_names"

    encounter_condition_value_id = Column(
        Integer, ForeignKey("encounter_condition_values.id"), primary_key=True
    )
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class PokemonEncounter(Base):
    """
    One encounter slot of a pokemon in a location area.

    Natural key: (pokemon, area, method, version, min_level, max_level).
    """
    __tablename__ = "pokemon_encounters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), nullable=False, index=True)
    location_area_id = Column(Integer, ForeignKey("location_areas.id"), nullable=False)
    encounter_method_id = Column(Integer, ForeignKey("encounter_methods.id"), nullable=False)
    version_id = Column(Integer, ForeignKey("versions.id"), nullable=False)
    min_level = Column(Integer, nullable=False)
    max_level = Column(Integer, nullable=False)
    chance = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "pokemon_id", "location_area_id", "encounter_method_id",
            "version_id", "min_level", "max_level",
            name="uq_pokemon_encounter_slot"
        ),
    )


class EncounterConditionValueMap(Base):
    __tablename__ = "encounter_condition_value_maps"

    pokemon_encounter_id = Column(Integer, ForeignKey("pokemon_encounters.id"), primary_key=True)
    encounter_condition_value_id = Column(
        Integer, ForeignKey("encounter_condition_values.id"), primary_key=True
    )
