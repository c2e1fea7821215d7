from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from models.base import Base


class EvolutionTrigger(Base):
    __tablename__ = "evolution_triggers"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class EvolutionTriggerName(Base):
    __tablename__ = "evolution_trigger_names"

    evolution_trigger_id = Column(Integer, ForeignKey("evolution_triggers.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class EvolutionChain(Base):
    __tablename__ = "evolution_chains"

    id = Column(Integer, primary_key=True, autoincrement=False)
    baby_trigger_item_id = Column(Integer, ForeignKey("items.id"), nullable=True)


class PokemonEvolution(Base):
    """
    One way a species can be evolved into.

    Rows are identified by the full tuple of conditions, not by trigger alone;
    the parent species is recorded on ``PokemonSpecies.evolves_from_species_id``.
    """
    __tablename__ = "pokemon_evolutions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pokemon_species_id = Column(Integer, ForeignKey("pokemon_species.id"), nullable=False, index=True)
    evolution_trigger_id = Column(Integer, ForeignKey("evolution_triggers.id"), nullable=False)

    evolution_item_id = Column(Integer, ForeignKey("items.id"), nullable=True)
    gender_id = Column(Integer, ForeignKey("genders.id"), nullable=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=True)
    held_item_id = Column(Integer, ForeignKey("items.id"), nullable=True)
    known_move_id = Column(Integer, ForeignKey("moves.id"), nullable=True)
    known_move_type_id = Column(Integer, ForeignKey("types.id"), nullable=True)
    party_species_id = Column(Integer, ForeignKey("pokemon_species.id"), nullable=True)
    party_type_id = Column(Integer, ForeignKey("types.id"), nullable=True)
    trade_species_id = Column(Integer, ForeignKey("pokemon_species.id"), nullable=True)

    min_level = Column(Integer, nullable=True)
    time_of_day = Column(String(20), nullable=True)
    min_happiness = Column(Integer, nullable=True)
    min_beauty = Column(Integer, nullable=True)
    min_affection = Column(Integer, nullable=True)
    needs_overworld_rain = Column(Boolean, default=False, nullable=False)
    relative_physical_stats = Column(Integer, nullable=True)
    turn_upside_down = Column(Boolean, default=False, nullable=False)
