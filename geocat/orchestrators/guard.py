"""
Policy enforcement for GeoCat orchestrators.

Evaluates the authorization policy, records the outcome and raises
the matching error when the decision is a denial.
"""

from typing import Optional
from geocat.core import errors
from geocat.core.models import Action, Decision, Principal, ResourceRef
from geocat.core.policy import decide
from geocat.observability.logging_setup import get_logger
from geocat.observability.metrics import policy_decisions

log = get_logger("geocat.policy")

def authorize(action: Action, principal: Optional[Principal], resource: ResourceRef) -> Decision:
    """
    정책을 평가하고 거부되면 예외를 발생시킵니다.

    Raises:
        NotAuthenticated: 주체가 없는 경우
        AccessDenied: 인증되었지만 권한이 없는 경우
    """
    dec = decide(action, principal, resource)
    policy_decisions.labels(
        resource.kind.value, action.value, "allow" if dec.allow else "deny"
    ).inc()

    if not dec.allow:
        log.debug("정책 거부",
                  action=action.value,
                  kind=resource.kind.value,
                  principal=principal.id if principal else None,
                  reason=dec.reason)
        raise errors.from_denial(dec.denial)
    return dec

def require_principal(principal: Optional[Principal], action: Action, resource: ResourceRef) -> Principal:
    """
    인증 여부만 확인합니다. 소유 확인은 호출자가 저장소 조건으로 수행합니다.

    Raises:
        NotAuthenticated: 주체가 없는 경우
    """
    if principal is None:
        policy_decisions.labels(resource.kind.value, action.value, "deny").inc()
        raise errors.NotAuthenticated("Not authenticated")
    return principal
