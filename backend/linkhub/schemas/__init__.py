from linkhub.schemas.customers import CustomerOut
from linkhub.schemas.events import ClickEvent, ClickEventRecord, LinkEvent
from linkhub.schemas.imports import (
    BitlinksPage,
    BitlyImportCreate,
    BitlyImportMessage,
    BitlyImportStarted,
    BitlyImportStatus,
    BitlyLinkRecord,
)
from linkhub.schemas.sales import (
    SaleEventAnalyticsRow,
    SaleEventApiResponse,
    SaleEventRecord,
    TrackSaleRequest,
    TrackSaleResponse,
)

__all__ = [
    'CustomerOut',
    'ClickEvent',
    'ClickEventRecord',
    'LinkEvent',
    'BitlinksPage',
    'BitlyImportCreate',
    'BitlyImportMessage',
    'BitlyImportStarted',
    'BitlyImportStatus',
    'BitlyLinkRecord',
    'TrackSaleRequest',
    'TrackSaleResponse',
    'SaleEventRecord',
    'SaleEventAnalyticsRow',
    'SaleEventApiResponse',
]
