"""Search domain schemas - Pydantic models for destination search"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SearchType = Literal["location", "continent", "all", "na"]


class ImageSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    file_path: str
    desc: Optional[str] = None
    order: int = 0


class HostSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: Optional[str] = None


class PropertyLocation(BaseModel):
    """The location fields of a property, as nested under a retreat/program"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class EntitySummary(BaseModel):
    """A published retreat or program with its property and images"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: Optional[str] = None
    status: str
    property_id: str
    property: Optional[PropertyLocation] = None
    images: list[ImageSummary] = Field(default_factory=list)
    distance: Optional[float] = None


class OfferingSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: Optional[str] = None
    status: str


class PropertyResult(BaseModel):
    """A property search hit; related collections are present only when requested"""

    id: str
    name: str
    city: Optional[str] = None
    country: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    host_id: Optional[str] = None
    host: Optional[HostSummary] = None
    images: Optional[list[ImageSummary]] = None
    programs: Optional[list[OfferingSummary]] = None
    retreats: Optional[list[OfferingSummary]] = None
    distance: Optional[float] = None


class PropertyGroup(BaseModel):
    property_id: str
    property_name: str
    property_location: str
    items: list[EntitySummary]


class CountryGroup(BaseModel):
    country: str
    items: list[EntitySummary]


class PropertyCountryGroup(BaseModel):
    country: str
    properties: list[PropertyResult]


class SearchOptions(BaseModel):
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    radius_miles: Optional[float] = Field(None, gt=0)
    page: Optional[int] = Field(None, ge=1)
    page_size: Optional[int] = Field(None, ge=1, le=100)
    category: Optional[str] = None
    continent: Optional[str] = None


class PropertySearchOptions(BaseModel):
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    radius_miles: Optional[float] = Field(None, gt=0)
    limit: Optional[int] = Field(None, ge=1, le=100)
    include_host: bool = False
    include_images: bool = False
    include_programs: bool = False
    include_retreats: bool = False
    name_contains: Optional[str] = None
    continent: Optional[str] = None


class SearchResults(BaseModel):
    ok: bool
    type: SearchType
    data: Union[list[PropertyGroup], list[CountryGroup], list[EntitySummary]] = Field(
        default_factory=list
    )
    error: Optional[str] = None


class PropertySearchResults(BaseModel):
    ok: bool
    type: SearchType
    data: Union[list[PropertyCountryGroup], list[PropertyResult]] = Field(default_factory=list)
    error: Optional[str] = None
