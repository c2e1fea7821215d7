from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey
from models.base import Base


class Ability(Base):
    __tablename__ = "abilities"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    generation_id = Column(Integer, ForeignKey("generations.id"), nullable=False)
    is_main_series = Column(Boolean, default=True, nullable=False)


class AbilityName(Base):
    __tablename__ = "ability_names"

    ability_id = Column(Integer, ForeignKey("abilities.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class AbilityEffectText(Base):
    __tablename__ = "ability_effect_texts"

    ability_id = Column(Integer, ForeignKey("abilities.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    effect = Column(Text, nullable=True)
    short_effect = Column(Text, nullable=True)


class AbilityFlavorText(Base):
    __tablename__ = "ability_flavor_texts"

    ability_id = Column(Integer, ForeignKey("abilities.id"), primary_key=True)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    flavor_text = Column(Text, nullable=True)


class AbilityChangeLog(Base):
    __tablename__ = "ability_change_logs"

    ability_id = Column(Integer, ForeignKey("abilities.id"), primary_key=True)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), primary_key=True)


class AbilityChangeLogEffectText(Base):
    __tablename__ = "ability_change_log_effect_texts"

    ability_id = Column(Integer, ForeignKey("abilities.id"), primary_key=True)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    effect = Column(Text, nullable=True)
