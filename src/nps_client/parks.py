"""Parks resource of the NPS API.

Pydantic models mirroring the ``/parks`` response field for field. Python
attributes are snake_case; the wire names are the API's camelCase names,
produced by the alias generator. Every field has a default so partial
payloads still validate.
"""

from typing import TYPE_CHECKING

import pydantic
from pydantic.alias_generators import to_camel

from . import api

if TYPE_CHECKING:
    from .nps import NPSClient


class NPSModel(pydantic.BaseModel):
    """Base model for NPS API payloads."""

    model_config = pydantic.ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Activity(NPSModel):
    id: str = ""
    name: str = ""


class Topic(NPSModel):
    id: str = ""
    name: str = ""


class PhoneNumber(NPSModel):
    phone_number: str = ""
    description: str = ""
    extension: str = ""
    type: str = ""


class EmailAddress(NPSModel):
    description: str = ""
    email_address: str = ""


class Contacts(NPSModel):
    phone_numbers: list[PhoneNumber] = []
    email_addresses: list[EmailAddress] = []


class Hours(NPSModel):
    """Opening hours per weekday, as free text (e.g. "All Day")."""

    wednesday: str = ""
    monday: str = ""
    thursday: str = ""
    sunday: str = ""
    tuesday: str = ""
    friday: str = ""
    saturday: str = ""


class HoursException(NPSModel):
    """Hours that differ from the standard hours for a date range."""

    exception_hours: Hours | None = None
    start_date: str = ""
    name: str = ""
    end_date: str = ""


class OperatingHours(NPSModel):
    exceptions: list[HoursException] = []
    description: str = ""
    standard_hours: Hours | None = None
    name: str = ""


class Address(NPSModel):
    postal_code: str = ""
    city: str = ""
    state_code: str = ""
    country_code: str = ""
    province_territory_code: str = ""
    line1: str = ""
    line2: str = ""
    line3: str = ""
    type: str = ""


class Image(NPSModel):
    credit: str = ""
    title: str = ""
    alt_text: str = ""
    caption: str = ""
    url: str = ""


class EntranceFee(NPSModel):
    cost: str = ""
    description: str = ""
    title: str = ""


class EntrancePass(NPSModel):
    cost: str = ""
    description: str = ""
    title: str = ""


class Multimedia(NPSModel):
    title: str = ""
    id: str = ""
    type: str = ""
    url: str = ""


class Park(NPSModel):
    """A single park as returned by the ``/parks`` endpoint."""

    activities: list[Activity] = []
    addresses: list[Address] = []
    contacts: Contacts | None = None
    description: str = ""
    designation: str = ""
    directions_info: str = ""
    directions_url: str = ""
    entrance_fees: list[EntranceFee] = []
    entrance_passes: list[EntrancePass] = []
    full_name: str = ""
    id: str = ""
    images: list[Image] = []
    lat_long: str = ""
    latitude: str = ""
    longitude: str = ""
    multimedia: list[Multimedia] = []
    name: str = ""
    operating_hours: list[OperatingHours] = []
    park_code: str = ""
    relevance_score: int = 0
    states: str = ""
    topics: list[Topic] = []
    url: str = ""
    weather_info: str = ""


class Parks(NPSModel):
    """One page of the ``/parks`` response.

    ``total``, ``limit`` and ``start`` are strings, as the API sends them.
    """

    total: str = ""
    limit: str = ""
    start: str = ""
    data: list[Park] = []


class ParkOptions(api.QueryOptions):
    """Query parameters accepted by the ``/parks`` endpoint."""

    park_code: list[str] | None = pydantic.Field(None, alias="parkCode")
    state_code: list[str] | None = pydantic.Field(None, alias="stateCode")
    limit: int | None = None
    start: int | None = None
    q: str | None = None
    sort: list[str] | None = None


class ParksService:
    """Handles communication with the ``/parks`` endpoints of the NPS API."""

    def __init__(self, client: "NPSClient"):
        self._client = client

    def list(
        self,
        options: ParkOptions | None = None,
        *,
        timeout: float | None = None,
    ) -> Parks:
        """Fetch one page of parks.

        Args:
            options: Optional filters and paging parameters.
            timeout: Optional timeout in seconds for this request.

        Returns:
            The validated page of parks.

        Raises:
            nps_client.api.errors.NPSError: If the request fails.
        """
        request = self._client.api.new_request(
            "GET",
            "parks",
            api.with_options(options),
            timeout=timeout,
        )
        return self._client.api.send_and_decode(request, Parks)
