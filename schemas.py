"""
Couplet Schemas

Pydantic models for the couplet corpus.

CoupletSource is the shape of one YAML source file under data/couplets/.
The corpus build enriches it into Couplet, which is what the "couplets"
collection stores:
- division_number -> division {number, name, translation, transliteration}
- section_number  -> section  {...}
- chapter_number  -> chapter  {...}

Translator and Pagination describe pieces of API responses.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

MAX_COUPLET = 1330
MAX_DIVISION = 3
MAX_SECTION = 133
MAX_CHAPTER = 133

LANGUAGES = ("en", "hi", "ta")
INTERPRETATION_LANGUAGE = "ta"


class Translation(BaseModel):
    text: str = Field(..., description="Translated couplet text")
    explanation: Optional[str] = Field(None, description="Translator's explanation")
    author: str = Field(..., description="Translator display name")
    year: Optional[int] = Field(None, ge=1800, le=2100, description="Year of publication")


class Interpretation(BaseModel):
    text: str = Field(..., description="Commentary text")
    author: str = Field(..., description="Commentator display name")
    year: Optional[int] = Field(None, ge=1200, le=2100, description="Year of the commentary")


class Contributor(BaseModel):
    name: str
    github: Optional[str] = None


class Metadata(BaseModel):
    last_updated: datetime
    contributors: Optional[List[Contributor]] = None


class HierarchyName(BaseModel):
    """Names of a division, section or chapter as listed in the metadata files."""
    name: str = Field(..., description="Tamil name")
    translation: str = Field(..., description="English name")
    transliteration: str = Field(..., description="Latin-script transliteration")


class HierarchyRef(HierarchyName):
    number: int = Field(..., ge=1)


class CoupletSource(BaseModel):
    """
    Source file schema
    File: data/couplets/<number>.yml, root key "couplet"
    """
    number: int = Field(..., ge=1, le=MAX_COUPLET, description="Couplet number")
    division_number: int = Field(..., ge=1, le=MAX_DIVISION)
    section_number: int = Field(..., ge=1, le=MAX_SECTION)
    chapter_number: int = Field(..., ge=1, le=MAX_CHAPTER)
    tamil: List[str] = Field(..., min_length=2, max_length=2, description="The two lines")
    tamil_explanation: str = Field(..., description="Explanatory gloss")
    translations: Dict[str, List[Translation]] = Field(..., description="Language code -> translations")
    tamil_interpretations: List[Interpretation] = Field(...)
    keywords: List[str] = Field(..., min_length=1)
    metadata: Metadata


class Couplet(BaseModel):
    """
    Stored document schema
    Collection name: "couplets"
    """
    number: int = Field(..., ge=1, le=MAX_COUPLET)
    tamil: List[str] = Field(..., min_length=2, max_length=2)
    tamil_explanation: str
    division: HierarchyRef
    section: HierarchyRef
    chapter: HierarchyRef
    translations: Dict[str, List[Translation]]
    tamil_interpretations: List[Interpretation]
    keywords: List[str]
    metadata: Metadata


class Translator(BaseModel):
    id: str = Field(..., description="Normalized translator id")
    name: str
    year: Optional[int] = None
    language: str
    type: Literal["translation", "commentary"]


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    hasNext: bool
    hasPrev: bool
