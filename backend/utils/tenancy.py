from typing import Optional
from fastapi import Header, HTTPException


def get_tenant_id(x_tenant_id: str = Header(...)) -> str:
    if not x_tenant_id.strip():
        raise HTTPException(status_code=400, detail="X-Tenant-ID header is missing")
    return x_tenant_id


def get_changed_by(x_user_id: Optional[str] = Header(None)) -> Optional[str]:
    # Identity comes from the upstream auth layer; stored as created_by/updated_by only
    return x_user_id
