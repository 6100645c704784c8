from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Iterable
from urllib.parse import urlsplit

from pydantic import ValidationError

from linkhub.core.logging import get_logger
from linkhub.schemas.imports import BitlyLinkRecord
from linkhub.services.imports.sanitizer import sanitize_string
from linkhub.services.imports.types import ImportRequest, NormalizedLink, SkippedRecord, SkipReason, TransformResult
from linkhub.services.links import ROOT_KEY, link_constructor_simple

logger = get_logger('imports.bitly_transform')


def transform_page(records: Iterable[dict[str, Any]], request: ImportRequest) -> TransformResult:
    result = TransformResult()
    for raw in records:
        links, skipped = build_links_from_record(raw, request)
        result.links.extend(links)
        result.skipped.extend(skipped)
    return result


def build_links_from_record(
    raw: dict[str, Any],
    request: ImportRequest,
) -> tuple[list[NormalizedLink], list[SkippedRecord]]:
    raw_id = raw.get('id') if isinstance(raw, dict) else None
    try:
        record = BitlyLinkRecord.model_validate(raw)
    except ValidationError as exc:
        return [], [SkippedRecord(raw_id, SkipReason.INVALID_RECORD, str(exc))]

    if not record.id or not record.long_url:
        return [], [SkippedRecord(record.id, SkipReason.MISSING_FIELDS)]

    parts = record.id.split('/')
    domain = parts[0]
    key = parts[1] if len(parts) > 1 else ''
    if not domain or not key:
        return [], [SkippedRecord(record.id, SkipReason.INVALID_ID)]

    # bit.ly links and old short domains are not part of this workspace
    if domain not in request.domains:
        return [], [SkippedRecord(record.id, SkipReason.FOREIGN_DOMAIN, domain)]

    url = sanitize_string(record.long_url) or ''
    if url == '':
        logger.info('Skipping link with empty URL after sanitization: %s', record.id)
        return [], [SkippedRecord(record.id, SkipReason.EMPTY_URL)]

    if request.tag_mapping is not None:
        tag_ids = tuple(request.tag_mapping.get(tag) for tag in record.tags)
    else:
        tag_ids = ()

    primary = NormalizedLink(
        workspace_id=request.workspace_id,
        user_id=request.user_id,
        domain=domain,
        key=key,
        url=url,
        short_link=link_constructor_simple(domain, key),
        title=sanitize_string(record.title),
        archived=record.archived,
        created_at=_as_utc(record.created_at),
        tag_ids=tag_ids,
        folder_id=request.folder_id,
    )

    links = [primary]
    skipped: list[SkippedRecord] = []
    for alias in record.custom_bitlinks:
        parsed = parse_custom_bitlink(alias)
        if parsed is None:
            logger.error('Invalid custom bitlink, skipping: %s', alias)
            skipped.append(SkippedRecord(alias, SkipReason.INVALID_ALIAS))
            continue

        alias_domain, alias_key = parsed
        if alias_domain not in request.domains:
            logger.info('Custom bitlink %s is not on a workspace domain, skipping', alias)
            skipped.append(SkippedRecord(alias, SkipReason.FOREIGN_ALIAS_DOMAIN, alias_domain))
            continue

        links.append(
            replace(
                primary,
                domain=alias_domain,
                key=alias_key,
                short_link=link_constructor_simple(alias_domain, alias_key),
            )
        )

    return links, skipped


def parse_custom_bitlink(value: str) -> tuple[str, str] | None:
    try:
        parts = urlsplit(value.strip())
        hostname = parts.hostname
    except (AttributeError, ValueError):
        return None

    if not parts.scheme or not hostname:
        return None

    key = parts.path[1:] if parts.path.startswith('/') else parts.path
    return hostname, key or ROOT_KEY


def _as_utc(value: datetime | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
