from sqlalchemy import Column, Integer, String, Text, ForeignKey
from models.base import Base


# ============================================================================
# Move vocabularies
# ============================================================================

class MoveDamageClass(Base):
    __tablename__ = "move_damage_classes"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class MoveDamageClassName(Base):
    __tablename__ = "move_damage_class_names"

    move_damage_class_id = Column(Integer, ForeignKey("move_damage_classes.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class MoveDamageClassDescription(Base):
    __tablename__ = "move_damage_class_descriptions"

    move_damage_class_id = Column(Integer, ForeignKey("move_damage_classes.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    description = Column(Text, nullable=True)


class MoveTarget(Base):
    __tablename__ = "move_targets"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class MoveTargetName(Base):
    __tablename__ = "move_target_names"

    move_target_id = Column(Integer, ForeignKey("move_targets.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class MoveTargetDescription(Base):
    __tablename__ = "move_target_descriptions"

    move_target_id = Column(Integer, ForeignKey("move_targets.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    description = Column(Text, nullable=True)


class MoveLearnMethod(Base):
    __tablename__ = "move_learn_methods"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class MoveLearnMethodName(Base):
    __tablename__ = "move_learn_method_names"

    move_learn_method_id = Column(Integer, ForeignKey("move_learn_methods.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class MoveLearnMethodDescription(Base):
    __tablename__ = "move_learn_method_descriptions"

    move_learn_method_id = Column(Integer, ForeignKey("move_learn_methods.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    description = Column(Text, nullable=True)


class MoveMetaAilment(Base):
    __tablename__ = "move_meta_ailments"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class MoveMetaAilmentName(Base):
    __tablename__ = "move_meta_ailment_names"

    move_meta_ailment_id = Column(Integer, ForeignKey("move_meta_ailments.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class MoveMetaCategory(Base):
    __tablename__ = "move_meta_categories"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class MoveMetaCategoryDescription(Base):
    __tablename__ = "move_meta_category_descriptions"

    move_meta_category_id = Column(Integer, ForeignKey("move_meta_categories.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    description = Column(Text, nullable=True)


# ============================================================================
# Moves
# ============================================================================

class Move(Base):
    __tablename__ = "moves"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    generation_id = Column(Integer, ForeignKey("generations.id"), nullable=False)
    type_id = Column(Integer, ForeignKey("types.id"), nullable=False)
    move_damage_class_id = Column(Integer, ForeignKey("move_damage_classes.id"), nullable=False)
    move_target_id = Column(Integer, ForeignKey("move_targets.id"), nullable=False)
    power = Column(Integer, nullable=True)
    pp = Column(Integer, nullable=True)
    accuracy = Column(Integer, nullable=True)
    priority = Column(Integer, default=0, nullable=False)
    effect_chance = Column(Integer, nullable=True)
    contest_type_id = Column(Integer, ForeignKey("contest_types.id"), nullable=True)
    contest_effect_id = Column(Integer, ForeignKey("contest_effects.id"), nullable=True)
    super_contest_effect_id = Column(Integer, ForeignKey("super_contest_effects.id"), nullable=True)


class MoveName(Base):
    __tablename__ = "move_names"

    move_id = Column(Integer, ForeignKey("moves.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class MoveEffectEntry(Base):
    __tablename__ = "move_effect_entries"

    move_id = Column(Integer, ForeignKey("moves.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    effect = Column(Text, nullable=True)
    short_effect = Column(Text, nullable=True)


class MoveFlavorText(Base):
    __tablename__ = "move_flavor_texts"

    move_id = Column(Integer, ForeignKey("moves.id"), primary_key=True)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    flavor_text = Column(Text, nullable=True)


class MoveStatChange(Base):
    __tablename__ = "move_stat_changes"

    move_id = Column(Integer, ForeignKey("moves.id"), primary_key=True)
    stat_id = Column(Integer, ForeignKey("stats.id"), primary_key=True)
    change = Column(Integer, nullable=False)


class MoveMetaData(Base):
    __tablename__ = "move_meta_data"

    move_id = Column(Integer, ForeignKey("moves.id"), primary_key=True)
    move_meta_ailment_id = Column(Integer, ForeignKey("move_meta_ailments.id"), nullable=False)
    move_meta_category_id = Column(Integer, ForeignKey("move_meta_categories.id"), nullable=False)
    min_hits = Column(Integer, nullable=True)
    max_hits = Column(Integer, nullable=True)
    min_turns = Column(Integer, nullable=True)
    max_turns = Column(Integer, nullable=True)
    drain = Column(Integer, default=0, nullable=False)
    healing = Column(Integer, default=0, nullable=False)
    crit_rate = Column(Integer, default=0, nullable=False)
    ailment_chance = Column(Integer, default=0, nullable=False)
    flinch_chance = Column(Integer, default=0, nullable=False)
    stat_chance = Column(Integer, default=0, nullable=False)


class MovePastValue(Base):
    __tablename__ = "move_past_values"

    move_id = Column(Integer, ForeignKey("moves.id"), primary_key=True)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), primary_key=True)
    type_id = Column(Integer, ForeignKey("types.id"), nullable=True)
    power = Column(Integer, nullable=True)
    pp = Column(Integer, nullable=True)
    accuracy = Column(Integer, nullable=True)
    effect_chance = Column(Integer, nullable=True)
