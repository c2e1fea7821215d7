from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from models.base import Base


class Pokemon(Base):
    __tablename__ = "pokemon"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    pokemon_species_id = Column(Integer, ForeignKey("pokemon_species.id"), nullable=False, index=True)
    height = Column(Integer, nullable=True)
    weight = Column(Integer, nullable=True)
    base_experience = Column(Integer, nullable=True)
    order = Column(Integer, nullable=True)
    is_default = Column(Boolean, default=True, nullable=False)
    cries_latest = Column(String(500), nullable=True)
    cries_legacy = Column(String(500), nullable=True)


class PokemonStat(Base):
    __tablename__ = "pokemon_stats"

    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)
    stat_id = Column(Integer, ForeignKey("stats.id"), primary_key=True)
    base_stat = Column(Integer, nullable=False)
    effort = Column(Integer, default=0, nullable=False)


class PokemonType(Base):
    __tablename__ = "pokemon_types"

    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)
    slot = Column(Integer, primary_key=True, autoincrement=False)
    type_id = Column(Integer, ForeignKey("types.id"), nullable=False)


class PokemonAbility(Base):
    __tablename__ = "pokemon_abilities"

    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)
    slot = Column(Integer, primary_key=True, autoincrement=False)
    ability_id = Column(Integer, ForeignKey("abilities.id"), nullable=False)
    is_hidden = Column(Boolean, default=False, nullable=False)


class PokemonSprites(Base):
    __tablename__ = "pokemon_sprites"

    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)
    front_default = Column(String(500), nullable=True)
    front_shiny = Column(String(500), nullable=True)
    front_female = Column(String(500), nullable=True)
    front_shiny_female = Column(String(500), nullable=True)
    back_default = Column(String(500), nullable=True)
    back_shiny = Column(String(500), nullable=True)
    back_female = Column(String(500), nullable=True)
    back_shiny_female = Column(String(500), nullable=True)


class PokemonGameIndex(Base):
    __tablename__ = "pokemon_game_indices"

    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)
    version_id = Column(Integer, ForeignKey("versions.id"), primary_key=True)
    game_index = Column(Integer, nullable=False)


class PokemonTypePast(Base):
    __tablename__ = "pokemon_type_pasts"

    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)
    generation_id = Column(Integer, ForeignKey("generations.id"), primary_key=True)
    slot = Column(Integer, primary_key=True, autoincrement=False)
    type_id = Column(Integer, ForeignKey("types.id"), nullable=False)


class PokemonAbilityPast(Base):
    __tablename__ = "pokemon_ability_pasts"

    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)
    generation_id = Column(Integer, ForeignKey("generations.id"), primary_key=True)
    slot = Column(Integer, primary_key=True, autoincrement=False)
    ability_id = Column(Integer, ForeignKey("abilities.id"), nullable=True)
    is_hidden = Column(Boolean, default=False, nullable=False)


class PokemonMove(Base):
    """Move learnable by a pokemon in a version group through one method"""
    __tablename__ = "pokemon_moves"

    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), primary_key=True)
    move_id = Column(Integer, ForeignKey("moves.id"), primary_key=True)
    move_learn_method_id = Column(Integer, ForeignKey("move_learn_methods.id"), primary_key=True)
    level_learned_at = Column(Integer, default=0, nullable=False)
    order = Column(Integer, nullable=True)


class MoveLearnedByPokemon(Base):
    __tablename__ = "move_learned_by_pokemon"

    move_id = Column(Integer, ForeignKey("moves.id"), primary_key=True)
    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)


class PokemonSpeciesVariety(Base):
    __tablename__ = "pokemon_species_varieties"

    pokemon_species_id = Column(Integer, ForeignKey("pokemon_species.id"), primary_key=True)
    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), primary_key=True)
    is_default = Column(Boolean, default=False, nullable=False)


# ============================================================================
# Forms
# ============================================================================

class PokemonForm(Base):
    __tablename__ = "pokemon_forms"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), nullable=False, index=True)
    form_name = Column(String(100), nullable=True)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    is_battle_only = Column(Boolean, default=False, nullable=False)
    is_mega = Column(Boolean, default=False, nullable=False)
    form_order = Column(Integer, nullable=True)
    order = Column(Integer, nullable=True)


class PokemonFormName(Base):
    __tablename__ = "pokemon_form_names"

    pokemon_form_id = Column(Integer, ForeignKey("pokemon_forms.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)
    pokemon_name = Column(String(200), nullable=True)


class PokemonFormType(Base):
    __tablename__ = "pokemon_form_types"

    pokemon_form_id = Column(Integer, ForeignKey("pokemon_forms.id"), primary_key=True)
    slot = Column(Integer, primary_key=True, autoincrement=False)
    type_id = Column(Integer, ForeignKey("types.id"), nullable=False)


class PokemonFormSprites(Base):
    __tablename__ = "pokemon_form_sprites"

    pokemon_form_id = Column(Integer, ForeignKey("pokemon_forms.id"), primary_key=True)
    front_default = Column(String(500), nullable=True)
    front_shiny = Column(String(500), nullable=True)
    back_default = Column(String(500), nullable=True)
    back_shiny = Column(String(500), nullable=True)
