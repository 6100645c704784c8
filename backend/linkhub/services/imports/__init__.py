from linkhub.services.imports.bitly_client import BitlyClient
from linkhub.services.imports.bitly_transform import build_links_from_record, transform_page
from linkhub.services.imports.importer import BitlyImporter
from linkhub.services.imports.sanitizer import sanitize_string
from linkhub.services.imports.types import ImportPageResult, ImportRequest, ImportState, NormalizedLink

__all__ = [
    'BitlyClient',
    'BitlyImporter',
    'ImportPageResult',
    'ImportRequest',
    'ImportState',
    'NormalizedLink',
    'build_links_from_record',
    'sanitize_string',
    'transform_page',
]
