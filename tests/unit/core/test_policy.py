"""
Authorization Policy 단위 테스트

소유자/관리자 경로와 사용자 리소스의 관리자 우회 부재를 테스트합니다.
"""

import pytest
from geocat.core.models import Action, Denial, Principal, ResourceKind, ResourceRef, Role
from geocat.core.policy import CAPABILITIES, decide, resource_ref
from geocat.core.models import CatRecord, UserRecord

ALICE = Principal(id="alice", role=Role.USER)
BOB = Principal(id="bob", role=Role.USER)
ROOT = Principal(id="root", role=Role.ADMIN)


def cat_of(owner):
    return ResourceRef(kind=ResourceKind.CAT, owner_id=owner)


def user_ref(user_id):
    return ResourceRef(kind=ResourceKind.USER, owner_id=user_id)


class TestCatPolicy:
    """고양이 정책 테스트"""

    def test_read_without_principal(self):
        dec = decide(Action.READ, None, cat_of("alice"))
        assert dec.allow
        assert dec.denial is None

    def test_create_requires_authentication(self):
        dec = decide(Action.CREATE, None, cat_of(None))
        assert not dec.allow
        assert dec.denial is Denial.NOT_AUTHENTICATED

    def test_create_any_principal(self):
        assert decide(Action.CREATE, ALICE, cat_of(None)).allow

    def test_owner_may_update(self):
        assert decide(Action.UPDATE, ALICE, cat_of("alice")).allow

    def test_non_owner_update_denied(self):
        dec = decide(Action.UPDATE, ALICE, cat_of("bob"))
        assert not dec.allow
        assert dec.denial is Denial.ACCESS_DENIED

    def test_admin_ordinary_update_denied_unless_owner(self):
        assert not decide(Action.UPDATE, ROOT, cat_of("bob")).allow
        assert decide(Action.UPDATE, ROOT, cat_of("root")).allow

    def test_admin_owner_reassignment(self):
        assert decide(Action.UPDATE_OWNER, ROOT, cat_of("bob")).allow

    def test_owner_reassignment_requires_admin(self):
        dec = decide(Action.UPDATE_OWNER, ALICE, cat_of("alice"))
        assert not dec.allow
        assert dec.denial is Denial.ACCESS_DENIED

    def test_delete_paths(self):
        assert decide(Action.DELETE, BOB, cat_of("bob")).allow
        assert not decide(Action.DELETE, ALICE, cat_of("bob")).allow
        assert decide(Action.DELETE_ADMIN, ROOT, cat_of("bob")).allow
        assert not decide(Action.DELETE_ADMIN, BOB, cat_of("bob")).allow

    def test_unauthenticated_mutations(self):
        for action in (Action.UPDATE, Action.UPDATE_OWNER, Action.DELETE, Action.DELETE_ADMIN):
            dec = decide(action, None, cat_of("alice"))
            assert dec.denial is Denial.NOT_AUTHENTICATED

    def test_owner_path_without_owner_denied(self):
        assert not decide(Action.UPDATE, ALICE, cat_of(None)).allow


class TestUserPolicy:
    """사용자 정책 테스트"""

    def test_registration_unrestricted(self):
        assert decide(Action.CREATE, None, user_ref(None)).allow

    def test_read_unrestricted(self):
        assert decide(Action.READ, None, user_ref("alice")).allow

    def test_self_service(self):
        assert decide(Action.UPDATE, ALICE, user_ref("alice")).allow
        assert decide(Action.DELETE, ALICE, user_ref("alice")).allow

    @pytest.mark.parametrize("action", [Action.UPDATE, Action.DELETE, Action.UPDATE_OWNER, Action.DELETE_ADMIN])
    def test_no_admin_override(self, action):
        dec = decide(action, ROOT, user_ref("alice"))
        assert not dec.allow
        assert dec.denial is Denial.ACCESS_DENIED

    def test_other_user_denied(self):
        assert decide(Action.UPDATE, BOB, user_ref("alice")).denial is Denial.ACCESS_DENIED


class TestResourceRef:
    """capability 기반 소유자 추출 테스트"""

    def test_cat_owner_field(self):
        cat = CatRecord(id="c1", owner="alice", name="Miuku", species="cat")
        assert resource_ref(ResourceKind.CAT, cat).owner_id == "alice"

    def test_user_owner_field_is_id(self):
        user = UserRecord(id="alice", user_name="alice", email="a@example.com", password="x")
        assert resource_ref(ResourceKind.USER, user).owner_id == "alice"

    def test_capabilities(self):
        assert CAPABILITIES[ResourceKind.CAT].admin_override_allowed
        assert not CAPABILITIES[ResourceKind.USER].admin_override_allowed
