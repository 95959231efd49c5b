# ABOUTME: Pydantic models for page references and the structured facets returned by WikiPage
# ABOUTME: Image candidates, coordinates, sections, language links, and parsed infobox data

from pydantic import BaseModel, ConfigDict, Field, field_validator

FieldValue = str | list[str]


class PageReference(BaseModel):
    """Identifies the remote page every facet call targets."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    pageid: int | None = Field(default=None, description="Numeric page id, if known")
    title: str = Field(..., description="Canonical page title")
    ns: int = Field(default=0, description="Namespace number")
    canonicalurl: str | None = Field(default=None, description="Canonical URL of the page")
    fullurl: str | None = Field(default=None, description="Full URL of the page")


class ImageInfo(BaseModel):
    """One image-info record attached to an image listing entry."""

    model_config = ConfigDict(extra="ignore")

    url: str
    descriptionurl: str | None = None


class ImageCandidate(BaseModel):
    """One entry of a page's raw image listing."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., description="Image title, usually namespaced (File:Batman.png)")
    pageid: int | None = None
    imageinfo: list[ImageInfo] = Field(default_factory=list)

    @property
    def url(self) -> str | None:
        """URL of the first image-info record, if any."""
        return self.imageinfo[0].url if self.imageinfo else None


class Coordinates(BaseModel):
    """Geographical coordinates in decimal degrees."""

    model_config = ConfigDict(extra="ignore")

    lat: float
    lon: float
    primary: bool | None = None
    globe: str | None = None

    @field_validator("primary", mode="before")
    @classmethod
    def _flag_present(cls, value):
        # The API marks boolean flags with an empty string
        return True if value == "" else value


class Section(BaseModel):
    """A titled block of page text with nested subsections."""

    title: str
    content: str = ""
    items: list["Section"] = Field(default_factory=list)


class LangLink(BaseModel):
    """A link to the same page in another language."""

    lang: str
    title: str


class InfoboxData(BaseModel):
    """Parsed infobox data: flat general fields plus any wikitext tables."""

    general: dict[str, FieldValue] = Field(default_factory=dict)
    tables: list[list[dict[str, str]]] = Field(default_factory=list)
