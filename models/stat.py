from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey
from models.base import Base


class Stat(Base):
    __tablename__ = "stats"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    game_index = Column(Integer, nullable=True)
    is_battle_only = Column(Boolean, default=False, nullable=False)
    move_damage_class_id = Column(Integer, ForeignKey("move_damage_classes.id"), nullable=True)


class StatName(Base):
    __tablename__ = "stat_names"

    stat_id = Column(Integer, ForeignKey("stats.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class PokeathlonStat(Base):
    __tablename__ = "pokeathlon_stats"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class PokeathlonStatName(Base):
    __tablename__ = "pokeathlon_stat_names"

    pokeathlon_stat_id = Column(Integer, ForeignKey("pokeathlon_stats.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class Characteristic(Base):
    __tablename__ = "characteristics"

    id = Column(Integer, primary_key=True, autoincrement=False)
    gene_modulo = Column(Integer, nullable=False)
    possible_values = Column(Text, nullable=False)  # JSON-encoded list
    highest_stat_id = Column(Integer, ForeignKey("stats.id"), nullable=False)


class CharacteristicDescription(Base):
    __tablename__ = "characteristic_descriptions"

    characteristic_id = Column(Integer, ForeignKey("characteristics.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    description = Column(Text, nullable=True)


class MoveBattleStyle(Base):
    __tablename__ = "move_battle_styles"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class MoveBattleStyleName(Base):
    __tablename__ = "move_battle_style_names"

    move_battle_style_id = Column(Integer, ForeignKey("move_battle_styles.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class Nature(Base):
    __tablename__ = "natures"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    decreased_stat_id = Column(Integer, ForeignKey("stats.id"), nullable=True)
    increased_stat_id = Column(Integer, ForeignKey("stats.id"), nullable=True)
    hates_flavor_id = Column(Integer, ForeignKey("berry_flavors.id"), nullable=True)
    likes_flavor_id = Column(Integer, ForeignKey("berry_flavors.id"), nullable=True)


class NatureName(Base):
    __tablename__ = "nature_names"

    nature_id = Column(Integer, ForeignKey("natures.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class NaturePokeathlonStatAffect(Base):
    __tablename__ = "nature_pokeathlon_stat_affects"

    nature_id = Column(Integer, ForeignKey("natures.id"), primary_key=True)
    pokeathlon_stat_id = Column(Integer, ForeignKey("pokeathlon_stats.id"), primary_key=True)
    max_change = Column(Integer, nullable=False)


class NatureBattleStylePreference(Base):
    __tablename__ = "nature_battle_style_preferences"

    nature_id = Column(Integer, ForeignKey("natures.id"), primary_key=True)
    move_battle_style_id = Column(Integer, ForeignKey("move_battle_styles.id"), primary_key=True)
    low_hp_preference = Column(Integer, nullable=False)
    high_hp_preference = Column(Integer, nullable=False)


class Gender(Base):
    __tablename__ = "genders"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
