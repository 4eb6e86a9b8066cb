from typing import Union

from pydantic import BaseModel, ConfigDict

from uspsclient.models import CityState, VerifiedAddress


class PydanticVerifiedAddress(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    street1: str
    street2: str = ""
    city: str
    state: str
    zip: str


class PydanticCityState(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    city: str
    state: str
    zip: str


def from_dataclass(record: Union[VerifiedAddress, CityState]) -> BaseModel:
    """
    Converts a result record into its Pydantic equivalent.
    """
    if isinstance(record, VerifiedAddress):
        return PydanticVerifiedAddress.model_validate(record)
    if isinstance(record, CityState):
        return PydanticCityState.model_validate(record)

    raise TypeError(f"Unsupported record type: {type(record).__name__}")
