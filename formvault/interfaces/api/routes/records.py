"""Routes managing form records and their attachments."""

from dataclasses import replace
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from formvault.application.use_cases import (
    create_record as create_record_uc,
    delete_attachment as delete_attachment_uc,
    delete_record as delete_record_uc,
    fetch_attachments as fetch_attachments_uc,
    get_record as get_record_uc,
    list_records as list_records_uc,
    read_attachment_content as read_attachment_content_uc,
    reconcile_attachments as reconcile_attachments_uc,
)
from formvault.config import Settings
from formvault.domain.entities import Attachment, ParentRecord, User
from formvault.domain.errors import FormVaultError
from formvault.infrastructure.database import get_db
from formvault.infrastructure.storage import ContentSink
from formvault.interfaces.api.dependencies import (
    get_app_settings,
    get_current_active_user,
    get_sink,
    require_admin,
    require_editor,
)
from formvault.interfaces.api.routes_helpers import to_http_exception
from formvault.interfaces.api.schemas import (
    AttachmentRead,
    RecordCreate,
    RecordRead,
    RecordUpdate,
)
from formvault.utils import to_app_timezone

router = APIRouter(prefix="/records", tags=["records"])


def _attachment_to_read_model(attachment: Attachment) -> AttachmentRead:
    localized = replace(attachment, created_at=to_app_timezone(attachment.created_at))
    return AttachmentRead.model_validate(localized)


def _record_to_read_model(record: ParentRecord) -> RecordRead:
    return RecordRead(
        id=record.id,
        title=record.title,
        fields=record.fields,
        created_by=record.created_by,
        created_at=to_app_timezone(record.created_at),
        updated_by=record.updated_by,
        updated_at=to_app_timezone(record.updated_at),
        attachments=[_attachment_to_read_model(item) for item in record.attachments],
    )


@router.post("/", response_model=RecordRead, status_code=status.HTTP_201_CREATED)
def create_record(
    payload: RecordCreate,
    db: Session = Depends(get_db),
    sink: ContentSink = Depends(get_sink),
    settings: Settings = Depends(get_app_settings),
    current_user: User = Depends(require_editor),
) -> RecordRead:
    """Create a record with its initial attachments."""

    try:
        record = create_record_uc(
            db,
            title=payload.title,
            fields=payload.fields,
            payloads=[item.to_payload() for item in payload.attachments],
            sink=sink,
            max_bytes=settings.max_attachment_bytes,
            created_by=current_user.id,
        )
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return _record_to_read_model(record)


@router.get("/", response_model=list[RecordRead])
def list_records(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> list[RecordRead]:
    try:
        records = list_records_uc(db, skip=skip, limit=limit)
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return [_record_to_read_model(record) for record in records]


@router.get("/{record_id}", response_model=RecordRead)
def read_record(
    record_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> RecordRead:
    try:
        record = get_record_uc(db, record_id)
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return _record_to_read_model(record)


@router.put("/{record_id}", response_model=RecordRead)
def update_record(
    record_id: str,
    payload: RecordUpdate,
    db: Session = Depends(get_db),
    sink: ContentSink = Depends(get_sink),
    settings: Settings = Depends(get_app_settings),
    current_user: User = Depends(require_editor),
) -> RecordRead:
    """Update scalar fields, remove listed attachments and add new ones.

    Removals are committed before new attachments are stored. If storing the
    new attachments fails the response is an error but the removals remain.
    """

    try:
        reconcile_attachments_uc(
            db,
            record_id,
            payloads=[item.to_payload() for item in payload.attachments],
            removed_ids=payload.removed_attachment_ids,
            title=payload.title,
            fields=payload.fields,
            sink=sink,
            max_bytes=settings.max_attachment_bytes,
            updated_by=current_user.id,
        )
        record = get_record_uc(db, record_id)
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return _record_to_read_model(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(
    record_id: str,
    db: Session = Depends(get_db),
    sink: ContentSink = Depends(get_sink),
    _: User = Depends(require_admin),
) -> Response:
    try:
        delete_record_uc(db, record_id, sink=sink)
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{record_id}/attachments", response_model=list[AttachmentRead])
def list_attachments(
    record_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> list[AttachmentRead]:
    try:
        attachments = fetch_attachments_uc(db, record_id)
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return [_attachment_to_read_model(attachment) for attachment in attachments]


@router.get("/{record_id}/attachments/{attachment_id}/content")
def download_attachment(
    record_id: str,
    attachment_id: str,
    db: Session = Depends(get_db),
    sink: ContentSink = Depends(get_sink),
    _: User = Depends(get_current_active_user),
) -> Response:
    """Return the stored bytes of one attachment."""

    try:
        attachment, data = read_attachment_content_uc(
            db, record_id, attachment_id, sink=sink
        )
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc

    filename = attachment.display_name or attachment.id
    return Response(
        content=data,
        media_type=attachment.content_type,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"
        },
    )


@router.delete(
    "/{record_id}/attachments/{attachment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_attachment(
    record_id: str,
    attachment_id: str,
    db: Session = Depends(get_db),
    sink: ContentSink = Depends(get_sink),
    _: User = Depends(require_editor),
) -> Response:
    try:
        delete_attachment_uc(db, record_id, attachment_id, sink=sink)
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
