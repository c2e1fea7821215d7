from sqlalchemy import Column, Integer, String, ForeignKey
from models.base import Base


class BerryFlavor(Base):
    __tablename__ = "berry_flavors"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class BerryFlavorName(Base):
    __tablename__ = "berry_flavor_names"

    berry_flavor_id = Column(Integer, ForeignKey("berry_flavors.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class BerryFirmness(Base):
    __tablename__ = "berry_firmnesses"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class BerryFirmnessName(Base):
    __tablename__ = "berry_firmness_names"

    berry_firmness_id = Column(Integer, ForeignKey("berry_firmnesses.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class Berry(Base):
    __tablename__ = "berries"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    growth_time = Column(Integer, nullable=False)
    max_harvest = Column(Integer, nullable=False)
    natural_gift_power = Column(Integer, nullable=False)
    size = Column(Integer, nullable=False)
    smoothness = Column(Integer, nullable=False)
    soil_dryness = Column(Integer, nullable=False)
    berry_firmness_id = Column(Integer, ForeignKey("berry_firmnesses.id"), nullable=False)
    natural_gift_type_id = Column(Integer, ForeignKey("types.id"), nullable=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)


class BerryFlavorMap(Base):
    """Potency of one flavor in one berry"""
    __tablename__ = "berry_flavor_maps"

    berry_id = Column(Integer, ForeignKey("berries.id"), primary_key=True)
    berry_flavor_id = Column(Integer, ForeignKey("berry_flavors.id"), primary_key=True)
    potency = Column(Integer, nullable=False)
