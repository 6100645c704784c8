from datetime import datetime
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from linkhub.models.enums import PaymentProcessor
from linkhub.schemas.common import CamelModel, deprecated_field
from linkhub.schemas.customers import CustomerOut
from linkhub.schemas.events import COMMON_DEPRECATED_FIELDS, ClickEvent, ClickEventRecord, DeprecatedEventFieldsModel, LinkEvent


class TrackSaleRequest(CamelModel):
    customer_id: str = Field(
        min_length=1,
        max_length=100,
        description=(
            "This is the unique identifier for the customer in the client's app. "
            "This is used to track the customer's journey."
        ),
    )
    amount: int = Field(gt=0, strict=True, description='The amount of the sale. Should be passed in cents.')
    payment_processor: PaymentProcessor = Field(description='The payment processor via which the sale was made.')

    event_name: str = Field(
        default='Purchase',
        max_length=50,
        description=(
            'The name of the sale event. It can be used to track different types of event '
            "for example 'Purchase', 'Upgrade', 'Payment', etc."
        ),
        examples=['Purchase'],
    )
    invoice_id: str | None = Field(default=None, description='The invoice ID of the sale.')
    currency: str = Field(default='usd', description='The currency of the sale. Accepts ISO 4217 currency codes.')
    metadata: dict[str, Any] | None = Field(default=None, description='Additional metadata to be stored with the sale event.')

    @field_validator('customer_id', mode='before')
    @classmethod
    def strip_customer_id(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class TrackSaleCustomer(CamelModel):
    id: str
    name: str | None
    email: str | None
    avatar: str | None


class TrackSaleDetails(CamelModel):
    amount: int
    currency: str
    payment_processor: str
    invoice_id: str | None
    metadata: dict[str, Any] | None


class TrackSaleResponse(CamelModel):
    event_name: str
    customer: TrackSaleCustomer
    sale: TrackSaleDetails


class SaleEventRecord(ClickEventRecord):
    """Sale row as written to the analytics datasource."""

    # assigned by the datasource on ingestion
    timestamp: str | None = None
    event_id: str
    event_name: str = 'Purchase'
    customer_id: str
    payment_processor: str
    amount: int
    invoice_id: str = ''
    currency: str = 'usd'
    metadata: str = ''


class SaleEventAnalyticsRow(BaseModel):
    """Sale row as returned by the analytics events endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    event: Literal['sale']
    timestamp: str
    event_id: str
    event_name: str
    customer_id: str
    payment_processor: str
    invoice_id: str
    sale_amount: int = Field(alias='saleAmount')
    click_id: str
    link_id: str
    url: str
    continent: str | None = None
    country: str | None = None
    city: str | None = None
    device: str | None = None
    browser: str | None = None
    os: str | None = None
    referer: str | None = None
    referer_url: str | None = None
    referer_url_processed: str | None = None
    qr: int | None = None
    ip: str | None = None


class SaleEventDetails(CamelModel):
    amount: int
    invoice_id: str | None = None
    payment_processor: PaymentProcessor


class SaleEventApiResponse(DeprecatedEventFieldsModel):
    model_config = ConfigDict(json_schema_extra={'title': 'SaleEvent'})

    deprecated_fields: ClassVar[dict[str, tuple[str, str]]] = {
        **COMMON_DEPRECATED_FIELDS,
        'sale_amount': ('sale', 'amount'),
        'deprecated_invoice_id': ('sale', 'invoice_id'),
        'deprecated_payment_processor': ('sale', 'payment_processor'),
    }

    event: Literal['sale'] = 'sale'
    timestamp: str
    event_id: str
    event_name: str
    customer: CustomerOut
    sale: SaleEventDetails

    @computed_field(alias='saleAmount', **deprecated_field('Deprecated. Use `sale.amount` instead.'))
    @property
    def sale_amount(self) -> int:
        return self.sale.amount

    @computed_field(alias='invoice_id', **deprecated_field('Deprecated. Use `sale.invoiceId` instead.'))
    @property
    def deprecated_invoice_id(self) -> str | None:
        return self.sale.invoice_id

    @computed_field(alias='payment_processor', **deprecated_field('Deprecated. Use `sale.paymentProcessor` instead.'))
    @property
    def deprecated_payment_processor(self) -> str:
        return PaymentProcessor(self.sale.payment_processor).value

    @field_validator('timestamp', mode='before')
    @classmethod
    def coerce_timestamp(cls, value):
        if isinstance(value, datetime):
            return value.isoformat()
        return str(value)

    @classmethod
    def from_analytics(cls, row: SaleEventAnalyticsRow, link: LinkEvent, customer: CustomerOut) -> 'SaleEventApiResponse':
        click = ClickEvent(
            id=row.click_id,
            url=row.url,
            continent=row.continent,
            country=row.country,
            city=row.city,
            device=row.device,
            browser=row.browser,
            os=row.os,
            referer=row.referer,
            referer_url=row.referer_url,
            qr=bool(row.qr) if row.qr is not None else None,
            ip=row.ip,
        )
        return cls(
            timestamp=row.timestamp,
            event_id=row.event_id,
            event_name=row.event_name,
            link=link,
            click=click,
            customer=customer,
            sale=SaleEventDetails(
                amount=row.sale_amount,
                invoice_id=row.invoice_id,
                payment_processor=row.payment_processor,
            ),
        )
