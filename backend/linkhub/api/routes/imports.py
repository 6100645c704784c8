import uuid

import httpx
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from linkhub.api.deps import get_db, get_import_flags
from linkhub.core.logging import get_logger
from linkhub.models.domain import Domain
from linkhub.models.enums import ImportProvider
from linkhub.models.folder import Folder
from linkhub.models.workspace import Workspace
from linkhub.schemas.imports import BitlyImportCreate, BitlyImportMessage, BitlyImportStarted, BitlyImportStatus
from linkhub.services.imports.bitly_client import BitlyClient
from linkhub.services.imports.flags import ImportFlagStore
from linkhub.services.imports.store import LinkImportStore
from linkhub.services.task_dispatcher import dispatch_bitly_import

logger = get_logger('api.imports')
router = APIRouter()

PROVIDER = ImportProvider.BITLY.value


@router.post('/workspaces/{workspace_id}/import/bitly/', response_model=BitlyImportStarted)
def start_bitly_import(
    workspace_id: uuid.UUID,
    payload: BitlyImportCreate,
    db: Session = Depends(get_db),
    flags: ImportFlagStore = Depends(get_import_flags),
):
    workspace = db.query(Workspace).filter(Workspace.id == workspace_id).first()
    if not workspace:
        raise HTTPException(status_code=404, detail='Workspace not found')

    claimed = {row[0] for row in db.query(Domain.slug).filter(Domain.workspace_id == workspace_id).all()}
    foreign = [domain for domain in payload.domains if domain not in claimed]
    if foreign:
        raise HTTPException(status_code=400, detail=f'Domains not added to this workspace: {", ".join(foreign)}')

    if payload.folder_id:
        folder = db.query(Folder).filter(Folder.id == payload.folder_id, Folder.workspace_id == workspace_id).first()
        if not folder:
            raise HTTPException(status_code=404, detail='Folder not found')

    if flags.is_importing(PROVIDER, workspace_id):
        raise HTTPException(status_code=409, detail='A Bitly import is already running for this workspace')

    flags.save_api_key(PROVIDER, workspace_id, payload.api_key)

    if payload.import_tags:
        try:
            tag_names = BitlyClient(payload.api_key).fetch_group_tags(payload.bitly_group)
        except httpx.HTTPError as exc:
            flags.clear(PROVIDER, workspace_id)
            raise HTTPException(status_code=502, detail=f'Failed to fetch Bitly tags: {exc}') from exc
        # tags that end up without links are removed when the import finishes
        mapping = LinkImportStore(db).ensure_tags(workspace_id, tag_names)
        flags.save_tag_mapping(PROVIDER, workspace_id, mapping)

    message = BitlyImportMessage(
        workspace_id=workspace_id,
        user_id=payload.user_id,
        bitly_group=payload.bitly_group,
        domains=payload.domains,
        folder_id=payload.folder_id,
        import_tags=payload.import_tags,
    )
    mode, task_id = dispatch_bitly_import(message.model_dump(mode='json'))
    logger.info('Bitly import started for workspace %s (mode=%s)', workspace_id, mode)
    return BitlyImportStarted(status='queued', mode=mode, task_id=task_id)


@router.get('/workspaces/{workspace_id}/import/bitly/', response_model=BitlyImportStatus)
def get_bitly_import_status(workspace_id: uuid.UUID, flags: ImportFlagStore = Depends(get_import_flags)):
    return BitlyImportStatus(workspace_id=workspace_id, importing=flags.is_importing(PROVIDER, workspace_id))
