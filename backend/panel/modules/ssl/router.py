from typing import List

from fastapi import APIRouter, Depends

from panel.core.exceptions import ConflictError
from panel.core.schemas import MessageResponse, patch_dict
from panel.modules.auth.deps import (
    get_current_user,
    get_owned,
    get_storage,
    is_admin,
    owner_filter,
    resolve_owner,
)
from panel.modules.ssl import schemas, service
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/ssl-certificates", tags=["SSL"])


@router.get("", response_model=List[schemas.SslCertificateResponse])
def list_all_certificates(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    now = storage.clock()
    return [service.to_view(cert, now) for cert in storage.ssl_certificates.list(owner_filter(current_user))]


@router.get("/{domain_id}", response_model=List[schemas.SslCertificateResponse])
def list_certificates(domain_id: int, storage: Storage = Depends(get_storage),
                      current_user: User = Depends(get_current_user)):
    if is_admin(current_user):
        certs = storage.get_ssl_certificates_by_domain_id(domain_id)
    else:
        get_owned(storage.domains, domain_id, current_user, "Domain")
        certs = storage.ssl_certificates.list({"domain_id": domain_id, "user_id": current_user.id})

    now = storage.clock()
    return [service.to_view(cert, now) for cert in certs]


# 1. REQUEST / UPLOAD CERTIFICATE
@router.post("", response_model=schemas.SslCertificateResponse, status_code=201)
def create_certificate(payload: schemas.SslCertificateCreate, storage: Storage = Depends(get_storage),
                       current_user: User = Depends(get_current_user)):
    domain = get_owned(storage.domains, payload.domain_id, current_user, "Domain")

    active = storage.ssl_certificates.first(domain_id=domain.id, status="active")
    if active:
        raise ConflictError("Domain already has an active certificate", details={"certificateId": active.id})

    data = payload.model_dump()
    data["user_id"] = domain.user_id if payload.user_id is None else resolve_owner(current_user, payload.user_id)

    now = storage.clock()
    cert = storage.ssl_certificates.create(service.issue(data, now))
    return service.to_view(cert, now)


@router.put("/{cert_id}", response_model=schemas.SslCertificateResponse)
def update_certificate(cert_id: int, payload: schemas.SslCertificateUpdate, storage: Storage = Depends(get_storage),
                       current_user: User = Depends(get_current_user)):
    get_owned(storage.ssl_certificates, cert_id, current_user, "SSL certificate")
    cert = storage.ssl_certificates.update(cert_id, patch_dict(payload))
    return service.to_view(cert, storage.clock())


# 2. RENEW
@router.post("/{cert_id}/renew", response_model=schemas.SslCertificateResponse)
def renew_certificate(cert_id: int, storage: Storage = Depends(get_storage),
                      current_user: User = Depends(get_current_user)):
    cert = get_owned(storage.ssl_certificates, cert_id, current_user, "SSL certificate")
    now = storage.clock()
    cert = storage.ssl_certificates.update(cert_id, service.renewal(cert, now))
    return service.to_view(cert, now)


@router.delete("/{cert_id}", response_model=MessageResponse)
def delete_certificate(cert_id: int, storage: Storage = Depends(get_storage),
                       current_user: User = Depends(get_current_user)):
    get_owned(storage.ssl_certificates, cert_id, current_user, "SSL certificate")
    storage.ssl_certificates.delete(cert_id)
    return {"message": "SSL certificate deleted"}
