from pydantic import Field

from linkhub.schemas.common import CamelModel


class CustomerOut(CamelModel):
    id: str = Field(description='The unique identifier of the customer in Linkhub.')
    external_id: str | None = Field(default=None, description="The customer's unique identifier in the client's app.")
    name: str | None = None
    email: str | None = None
    avatar: str | None = None
    country: str | None = None
