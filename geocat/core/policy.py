"""
Authorization policy for GeoCat.

This module contains the pure decision function that tells whether a
principal may perform an action on a resource. One rule table serves
every resource kind; the kinds differ only in their capability
descriptor.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from .models import Action, Decision, Denial, Principal, ResourceKind, ResourceRef, Role

@dataclass(frozen=True)
class Capability:
    """리소스 종류별 권한 특성"""
    owner_field: str
    admin_override_allowed: bool
    public_create: bool

CAPABILITIES: Dict[ResourceKind, Capability] = {
    ResourceKind.CAT: Capability(owner_field="owner", admin_override_allowed=True, public_create=False),
    # 사용자 수정/삭제에는 관리자 우회가 없음
    ResourceKind.USER: Capability(owner_field="id", admin_override_allowed=False, public_create=True),
}

# 역할별 관리자 권한 여부 (새 역할 추가 시 KeyError로 드러남)
ELEVATED_ROLES: Dict[Role, bool] = {
    Role.USER: False,
    Role.ADMIN: True,
}

OWNER_ACTIONS = (Action.UPDATE, Action.DELETE)
ADMIN_ACTIONS = (Action.UPDATE_OWNER, Action.DELETE_ADMIN)

def resource_ref(kind: ResourceKind, record=None) -> ResourceRef:
    """레코드에서 소유자 필드를 읽어 ResourceRef를 만듭니다."""
    if record is None:
        return ResourceRef(kind=kind)
    owner_field = CAPABILITIES[kind].owner_field
    return ResourceRef(kind=kind, owner_id=getattr(record, owner_field))

def _allow(reason: str) -> Decision:
    return Decision(allow=True, reason=reason)

def _deny(denial: Denial, reason: str) -> Decision:
    return Decision(allow=False, reason=reason, denial=denial)

def decide(action: Action, principal: Optional[Principal], resource: ResourceRef) -> Decision:
    """
    동작 허용 여부를 평가합니다.

    Args:
        action: 수행하려는 동작
        principal: 인증된 주체 (없으면 None)
        resource: 대상 리소스의 종류와 소유자

    Returns:
        정책 평가 결과
    """
    capability = CAPABILITIES[resource.kind]
    kind = resource.kind.value

    if action is Action.READ:
        return _allow(f"{kind}: read is unrestricted")

    if action is Action.CREATE and capability.public_create:
        return _allow(f"{kind}: create is unrestricted")

    if principal is None:
        return _deny(Denial.NOT_AUTHENTICATED, f"{kind}: {action.value} requires authentication")

    if action is Action.CREATE:
        return _allow(f"{kind}: authenticated principal may create")

    if action in OWNER_ACTIONS:
        if resource.owner_id is not None and principal.id == resource.owner_id:
            return _allow(f"{kind}: principal owns resource")
        return _deny(Denial.ACCESS_DENIED, f"{kind}: {action.value} restricted to owner")

    if action in ADMIN_ACTIONS:
        if not capability.admin_override_allowed:
            return _deny(Denial.ACCESS_DENIED, f"{kind}: no admin override for {action.value}")
        if ELEVATED_ROLES[principal.role]:
            return _allow(f"{kind}: admin path")
        return _deny(Denial.ACCESS_DENIED, f"{kind}: {action.value} restricted to admin")

    raise ValueError(f"Unhandled action: {action!r}")
