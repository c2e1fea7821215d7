from sqlalchemy import Column, Integer, String, Text, ForeignKey
from models.base import Base


# ============================================================================
# Item vocabularies
# ============================================================================

class ItemPocket(Base):
    __tablename__ = "item_pockets"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class ItemPocketName(Base):
    __tablename__ = "item_pocket_names"

    item_pocket_id = Column(Integer, ForeignKey("item_pockets.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class ItemCategory(Base):
    __tablename__ = "item_categories"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    item_pocket_id = Column(Integer, ForeignKey("item_pockets.id"), nullable=False)


class ItemCategoryName(Base):
    __tablename__ = "item_category_names"

    item_category_id = Column(Integer, ForeignKey("item_categories.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class ItemFlingEffect(Base):
    __tablename__ = "item_fling_effects"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class ItemFlingEffectEffectText(Base):
    __tablename__ = "item_fling_effect_effect_texts"

    item_fling_effect_id = Column(Integer, ForeignKey("item_fling_effects.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    effect = Column(Text, nullable=True)


class ItemAttribute(Base):
    __tablename__ = "item_attributes"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class ItemAttributeName(Base):
    __tablename__ = "item_attribute_names"

    item_attribute_id = Column(Integer, ForeignKey("item_attributes.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class ItemAttributeDescription(Base):
    __tablename__ = "item_attribute_descriptions"

    item_attribute_id = Column(Integer, ForeignKey("item_attributes.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    description = Column(Text, nullable=True)


# ============================================================================
# Items
# ============================================================================

class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False, unique=True)
    cost = Column(Integer, default=0, nullable=False)
    fling_power = Column(Integer, nullable=True)
    item_category_id = Column(Integer, ForeignKey("item_categories.id"), nullable=False)
    item_fling_effect_id = Column(Integer, ForeignKey("item_fling_effects.id"), nullable=True)


class ItemName(Base):
    __tablename__ = "item_names"

    item_id = Column(Integer, ForeignKey("items.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class ItemEffectText(Base):
    __tablename__ = "item_effect_texts"

    item_id = Column(Integer, ForeignKey("items.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    effect = Column(Text, nullable=True)
    short_effect = Column(Text, nullable=True)


class ItemFlavorText(Base):
    __tablename__ = "item_flavor_texts"

    item_id = Column(Integer, ForeignKey("items.id"), primary_key=True)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    flavor_text = Column(Text, nullable=True)


class ItemGameIndex(Base):
    __tablename__ = "item_game_indices"

    item_id = Column(Integer, ForeignKey("items.id"), primary_key=True)
    generation_id = Column(Integer, ForeignKey("generations.id"), primary_key=True)
    game_index = Column(Integer, nullable=False)


class ItemAttributeMap(Base):
    __tablename__ = "item_attribute_maps"

    item_id = Column(Integer, ForeignKey("items.id"), primary_key=True)
    item_attribute_id = Column(Integer, ForeignKey("item_attributes.id"), primary_key=True)


class Machine(Base):
    """A TM/HM/TR teaching a move in one version group"""
    __tablename__ = "machines"

    id = Column(Integer, primary_key=True, autoincrement=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    move_id = Column(Integer, ForeignKey("moves.id"), nullable=False)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), nullable=False)
