from sqlalchemy import Column, Integer, String, Text, ForeignKey
from models.base import Base


class ContestType(Base):
    __tablename__ = "contest_types"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    berry_flavor_id = Column(Integer, ForeignKey("berry_flavors.id"), nullable=True)


class ContestTypeName(Base):
    __tablename__ = "contest_type_names"

    contest_type_id = Column(Integer, ForeignKey("contest_types.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)
    color = Column(String(50), nullable=True)


class ContestEffect(Base):
    __tablename__ = "contest_effects"

    id = Column(Integer, primary_key=True, autoincrement=False)
    appeal = Column(Integer, nullable=False)
    jam = Column(Integer, nullable=False)


class ContestEffectEffectText(Base):
    __tablename__ = "contest_effect_effect_texts"

    contest_effect_id = Column(Integer, ForeignKey("contest_effects.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    effect = Column(Text, nullable=True)


class ContestEffectFlavorText(Base):
    __tablename__ = "contest_effect_flavor_texts"

    contest_effect_id = Column(Integer, ForeignKey("contest_effects.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    flavor_text = Column(Text, nullable=True)


class SuperContestEffect(Base):
    __tablename__ = "super_contest_effects"

    id = Column(Integer, primary_key=True, autoincrement=False)
    appeal = Column(Integer, nullable=False)


class SuperContestEffectFlavorText(Base):
    __tablename__ = "super_contest_effect_flavor_texts"

    super_contest_effect_id = Column(Integer, ForeignKey("super_contest_effects.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    flavor_text = Column(Text, nullable=True)
