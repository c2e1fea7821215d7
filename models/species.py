from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey
from models.base import Base


# ============================================================================
# Species vocabularies
# ============================================================================

class EggGroup(Base):
    __tablename__ = "egg_groups"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class EggGroupName(Base):
    __tablename__ = "egg_group_names"

    egg_group_id = Column(Integer, ForeignKey("egg_groups.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class GrowthRate(Base):
    __tablename__ = "growth_rates"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    formula = Column(Text, nullable=True)


class GrowthRateDescription(Base):
    __tablename__ = "growth_rate_descriptions"

    growth_rate_id = Column(Integer, ForeignKey("growth_rates.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    description = Column(Text, nullable=True)


class GrowthRateExperienceLevel(Base):
    __tablename__ = "growth_rate_experience_levels"

    growth_rate_id = Column(Integer, ForeignKey("growth_rates.id"), primary_key=True)
    level = Column(Integer, primary_key=True, autoincrement=False)
    experience = Column(Integer, nullable=False)


class PokemonColor(Base):
    __tablename__ = "pokemon_colors"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class PokemonColorName(Base):
    __tablename__ = "pokemon_color_names"

    pokemon_color_id = Column(Integer, ForeignKey("pokemon_colors.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class PokemonShape(Base):
    __tablename__ = "pokemon_shapes"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class PokemonShapeName(Base):
    __tablename__ = "pokemon_shape_names"

    pokemon_shape_id = Column(Integer, ForeignKey("pokemon_shapes.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)
    awesome_name = Column(String(200), nullable=True)


class PokemonHabitat(Base):
    __tablename__ = "pokemon_habitats"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class PokemonHabitatName(Base):
    __tablename__ = "pokemon_habitat_names"

    pokemon_habitat_id = Column(Integer, ForeignKey("pokemon_habitats.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


# ============================================================================
# Species
# ============================================================================

class PokemonSpecies(Base):
    __tablename__ = "pokemon_species"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    order = Column(Integer, nullable=True)
    gender_rate = Column(Integer, nullable=False)
    capture_rate = Column(Integer, nullable=False)
    base_happiness = Column(Integer, nullable=True)
    is_baby = Column(Boolean, default=False, nullable=False)
    is_legendary = Column(Boolean, default=False, nullable=False)
    is_mythical = Column(Boolean, default=False, nullable=False)
    hatch_counter = Column(Integer, nullable=True)
    has_gender_differences = Column(Boolean, default=False, nullable=False)
    forms_switchable = Column(Boolean, default=False, nullable=False)
    generation_id = Column(Integer, ForeignKey("generations.id"), nullable=False)
    growth_rate_id = Column(Integer, ForeignKey("growth_rates.id"), nullable=False)
    pokemon_color_id = Column(Integer, ForeignKey("pokemon_colors.id"), nullable=False)
    pokemon_shape_id = Column(Integer, ForeignKey("pokemon_shapes.id"), nullable=False)
    pokemon_habitat_id = Column(Integer, ForeignKey("pokemon_habitats.id"), nullable=True)

    # Written by the evolution post-passes, never during species processing
    evolves_from_species_id = Column(Integer, ForeignKey("pokemon_species.id"), nullable=True)
    evolution_chain_id = Column(Integer, ForeignKey("evolution_chains.id"), nullable=True, index=True)


class PokemonSpeciesName(Base):
    __tablename__ = "pokemon_species_names"

    pokemon_species_id = Column(Integer, ForeignKey("pokemon_species.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)
    genus = Column(String(200), nullable=True)


class PokemonSpeciesEggGroup(Base):
    __tablename__ = "pokemon_species_egg_groups"

    pokemon_species_id = Column(Integer, ForeignKey("pokemon_species.id"), primary_key=True)
    egg_group_id = Column(Integer, ForeignKey("egg_groups.id"), primary_key=True)


class PokemonSpeciesFlavorText(Base):
    __tablename__ = "pokemon_species_flavor_texts"

    pokemon_species_id = Column(Integer, ForeignKey("pokemon_species.id"), primary_key=True)
    version_id = Column(Integer, ForeignKey("versions.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    flavor_text = Column(Text, nullable=True)


class PokemonSpeciesGender(Base):
    __tablename__ = "pokemon_species_genders"

    pokemon_species_id = Column(Integer, ForeignKey("pokemon_species.id"), primary_key=True)
    gender_id = Column(Integer, ForeignKey("genders.id"), primary_key=True)
    rate = Column(Integer, nullable=True)


# ============================================================================
# Pokedexes
# ============================================================================

class Pokedex(Base):
    __tablename__ = "pokedexes"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    is_main_series = Column(Boolean, default=True, nullable=False)
    region_id = Column(Integer, ForeignKey("regions.id"), nullable=True)


class PokedexName(Base):
    __tablename__ = "pokedex_names"

    pokedex_id = Column(Integer, ForeignKey("pokedexes.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class PokedexDescription(Base):
    __tablename__ = "pokedex_descriptions"

    pokedex_id = Column(Integer, ForeignKey("pokedexes.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    description = Column(Text, nullable=True)


class VersionGroupPokedex(Base):
    __tablename__ = "version_group_pokedexes"

    version_group_id = Column(Integer, ForeignKey("version_groups.id"), primary_key=True)
    pokedex_id = Column(Integer, ForeignKey("pokedexes.id"), primary_key=True)


class PokemonSpeciesPokedexNumber(Base):
    __tablename__ = "pokemon_species_pokedex_numbers"

    pokemon_species_id = Column(Integer, ForeignKey("pokemon_species.id"), primary_key=True)
    pokedex_id = Column(Integer, ForeignKey("pokedexes.id"), primary_key=True)
    pokedex_number = Column(Integer, nullable=False)
