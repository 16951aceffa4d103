from enum import Enum
from typing import List, Optional, Union

from pydantic import Field

from lexcan.core.models import LexModel


class Language(str, Enum):
    """Language of a consolidated law, named after its corpus directory."""

    ENGLISH = "eng"
    FRENCH = "fra"


class DocumentType(str, Enum):
    """Represents the kind of legislative instrument.

    - ACT: a consolidated Act (XML root tag "Statute")
    - REGULATION: a consolidated regulation (XML root tag "Regulation")
    """

    ACT = "act"
    REGULATION = "regulation"


class Corpus(str, Enum):
    """The four source corpora of the Justice Laws XML repository.

    Values are the (language, kind) keys of settings.CORPUS_DIRECTORIES.
    """

    ENGLISH_ACTS = "eng-acts"
    ENGLISH_REGULATIONS = "eng-regulations"
    FRENCH_ACTS = "fra-acts"
    FRENCH_REGULATIONS = "fra-regulations"

    @property
    def language(self) -> Language:
        return Language(self.value.split("-")[0])

    @property
    def kind(self) -> str:
        return self.value.split("-")[1]


class Heading(LexModel):
    """A heading that precedes a section in document order."""

    level: Optional[int] = None
    text: str = ""


class ExternalReference(LexModel):
    """A reference to another instrument (XRefExternal)."""

    link: Optional[str] = None
    reference_type: Optional[str] = None
    text: str = ""


class InternalReference(LexModel):
    """A reference to a section of the same instrument (XRefInternal)."""

    link: Optional[str] = None


class ReferenceCount(LexModel):
    """One row of a document-level reference table."""

    link: str
    count: int


class EnablingAuthority(LexModel):
    """The Act a regulation is made under."""

    link: Optional[str] = None
    text: str = ""


class Section(LexModel):
    """Represents a section, subsection or preamble provision.

    Preamble provisions are numbered by position, so their id is an int.
    """

    id: Optional[Union[str, int]] = None
    text: str = ""
    marginal_note: Optional[str] = None
    lims_id: Optional[str] = None
    subsections: List["Section"] = Field(default_factory=list)
    headings: List[Heading] = Field(default_factory=list)
    external_refs: List[ExternalReference] = Field(default_factory=list)
    internal_refs: List[InternalReference] = Field(default_factory=list)


class Document(LexModel):
    """Represents one consolidated Act or regulation."""

    id: str
    lang: Language
    type: DocumentType
    short_title: Optional[str] = None
    long_title: Optional[str] = None
    bill_number: Optional[str] = None
    instrument_number: Optional[str] = None
    consolidated_number: Optional[str] = None
    last_amended_date: Optional[str] = None
    current_date: Optional[str] = None
    in_force_start_date: Optional[str] = None
    enabling_authority: Optional[EnablingAuthority] = None
    sections: List[Section] = Field(default_factory=list)
    internal_refs: List[ReferenceCount] = Field(default_factory=list)
    external_refs: List[ReferenceCount] = Field(default_factory=list)
    full_text: Optional[str] = None

    @property
    def has_preamble(self) -> bool:
        return bool(self.sections) and self.sections[0].id == "0"

    @property
    def title(self) -> str:
        """Return the best available display title."""
        return self.short_title or self.long_title or self.id
