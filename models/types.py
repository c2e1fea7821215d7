from sqlalchemy import Column, Integer, String, Float, ForeignKey
from models.base import Base


class Type(Base):
    __tablename__ = "types"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    generation_id = Column(Integer, ForeignKey("generations.id"), nullable=True)
    move_damage_class_id = Column(Integer, ForeignKey("move_damage_classes.id"), nullable=True)


class TypeName(Base):
    __tablename__ = "type_names"

    type_id = Column(Integer, ForeignKey("types.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class TypeEfficacy(Base):
    """
    Damage multiplier of an attacking type against a defending type.

    After matrix completion there is exactly one row per ordered type pair.
    """
    __tablename__ = "type_efficacies"

    damage_type_id = Column(Integer, ForeignKey("types.id"), primary_key=True)
    target_type_id = Column(Integer, ForeignKey("types.id"), primary_key=True)
    damage_factor = Column(Float, nullable=False, default=1.0)


class TypeEfficacyPast(Base):
    """Multiplier that applied up to (and including) a given generation"""
    __tablename__ = "type_efficacy_pasts"

    damage_type_id = Column(Integer, ForeignKey("types.id"), primary_key=True)
    target_type_id = Column(Integer, ForeignKey("types.id"), primary_key=True)
    generation_id = Column(Integer, ForeignKey("generations.id"), primary_key=True)
    damage_factor = Column(Float, nullable=False)
