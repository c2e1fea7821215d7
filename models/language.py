from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from models.base import Base


class Language(Base):
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    iso639 = Column(String(10), nullable=True)
    iso3166 = Column(String(10), nullable=True)
    official = Column(Boolean, default=False, nullable=False)


class LanguageName(Base):
    """Name of a language written in another (local) language"""
    __tablename__ = "language_names"

    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    local_language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)


class Region(Base):
    __tablename__ = "regions"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)


class Generation(Base):
    __tablename__ = "generations"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    main_region_id = Column(Integer, ForeignKey("regions.id"), nullable=True)


class VersionGroup(Base):
    __tablename__ = "version_groups"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    order = Column(Integer, nullable=True)
    generation_id = Column(Integer, ForeignKey("generations.id"), nullable=False)


class Version(Base):
    __tablename__ = "versions"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    version_group_id = Column(Integer, ForeignKey("version_groups.id"), nullable=False)


class VersionName(Base):
    __tablename__ = "version_names"

    version_id = Column(Integer, ForeignKey("versions.id"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)
    name = Column(String(200), nullable=True)
