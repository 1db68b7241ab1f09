"""
CatOrchestrator 단위 테스트

정책, 쿼리 엔진, 저장소가 결합된 고양이 요청 흐름을 테스트합니다.
"""

import pytest
from geocat.core.errors import (
    AccessDenied, InvalidBounds, MalformedCoordinate, NotAuthenticated, NotFound,
    UnsupportedRegion, ValidationError,
)
from geocat.core.models import CatAdminUpdate, CatCreate, CatUpdate, Coordinate, UserOutput


def body(name="Miuku", **kwargs):
    return CatCreate(name=name, species="cat", **kwargs)


class TestCreate:
    """고양이 생성 테스트"""

    @pytest.mark.asyncio
    async def test_owner_forced_to_principal(self, cats, alice, bob, tampere):
        cat = await cats.create(alice, body(owner=bob.id, location=tampere))
        assert cat.owner == alice.id

    @pytest.mark.asyncio
    async def test_admin_may_assign_owner(self, cats, admin, bob, tampere):
        cat = await cats.create(admin, body(owner=bob.id, location=tampere))
        assert cat.owner == bob.id

    @pytest.mark.asyncio
    async def test_admin_assign_unknown_owner(self, cats, admin, tampere):
        with pytest.raises(ValidationError):
            await cats.create(admin, body(owner="ghost", location=tampere))

    @pytest.mark.asyncio
    async def test_location_defaults_to_resolved_coords(self, cats, alice, tampere):
        cat = await cats.create(alice, body(), coords=tampere)
        assert cat.location == tampere

    @pytest.mark.asyncio
    async def test_body_location_wins(self, cats, alice, tampere):
        here = Coordinate(lat=1, lng=2)
        cat = await cats.create(alice, body(location=here), coords=tampere)
        assert cat.location == here

    @pytest.mark.asyncio
    async def test_location_required(self, cats, alice):
        with pytest.raises(ValidationError):
            await cats.create(alice, body())

    @pytest.mark.asyncio
    async def test_requires_authentication(self, cats, tampere):
        with pytest.raises(NotAuthenticated):
            await cats.create(None, body(location=tampere))


class TestRead:
    """고양이 조회 테스트"""

    @pytest.mark.asyncio
    async def test_get_expands_owner(self, cats, alice, tampere):
        created = await cats.create(alice, body(location=tampere))
        cat = await cats.get(created.id)
        assert isinstance(cat.owner, UserOutput)
        assert cat.owner.id == alice.id
        assert "password" not in cat.owner.model_dump()

    @pytest.mark.asyncio
    async def test_get_missing(self, cats):
        with pytest.raises(NotFound):
            await cats.get("missing")

    @pytest.mark.asyncio
    async def test_list_by_owner(self, cats, alice, bob, tampere):
        await cats.create(alice, body("a", location=tampere))
        await cats.create(bob, body("b", location=tampere))

        mine = await cats.list_by_owner(alice)
        assert [c.name for c in mine] == ["a"]
        assert mine[0].owner.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_list_by_owner_requires_principal(self, cats):
        with pytest.raises(NotAuthenticated):
            await cats.list_by_owner(None)

    @pytest.mark.asyncio
    async def test_list_paged_tolerates_bad_params(self, cats, alice, tampere):
        for i in range(3):
            await cats.create(alice, body(f"cat{i}", location=tampere))

        assert len(await cats.list_paged("abc", "-5")) == 3
        assert [c.name for c in await cats.list_paged("1", "1")] == ["cat1"]


class TestBoundingBox:
    """영역 조회 테스트"""

    @pytest.fixture
    async def placed(self, cats, alice):
        await cats.create(alice, body("inside", location=Coordinate(lat=61.5, lng=23.7)))
        await cats.create(alice, body("edge", location=Coordinate(lat=62.0, lng=23.8)))
        await cats.create(alice, body("outside", location=Coordinate(lat=60.1, lng=24.9)))

    @pytest.mark.asyncio
    async def test_boundary_inclusive(self, cats, placed):
        found = await cats.list_in_bounding_box("62,24", "61,23")
        assert sorted(c.name for c in found) == ["edge", "inside"]

    @pytest.mark.asyncio
    async def test_malformed(self, cats):
        with pytest.raises(MalformedCoordinate):
            await cats.list_in_bounding_box("62", "61,23")

    @pytest.mark.asyncio
    async def test_missing_parameter(self, cats):
        with pytest.raises(MalformedCoordinate):
            await cats.list_in_bounding_box(None, "61,23")

    @pytest.mark.asyncio
    async def test_inverted(self, cats):
        with pytest.raises(InvalidBounds):
            await cats.list_in_bounding_box("60,24", "61,23")

    @pytest.mark.asyncio
    async def test_antimeridian(self, cats):
        with pytest.raises(UnsupportedRegion):
            await cats.list_in_bounding_box("10,-170", "0,170")


class TestUpdate:
    """고양이 수정 테스트"""

    @pytest.mark.asyncio
    async def test_owner_update(self, cats, alice, tampere):
        created = await cats.create(alice, body(location=tampere))
        moved = Coordinate(lat=60.2, lng=24.9)
        cat = await cats.update(alice, created.id, CatUpdate(name="Renamed"), coords=moved)
        assert cat.name == "Renamed"
        assert cat.location == moved

    @pytest.mark.asyncio
    async def test_location_kept_without_coords(self, cats, alice, tampere):
        created = await cats.create(alice, body(location=tampere))
        cat = await cats.update(alice, created.id, CatUpdate(weight=3.5))
        assert cat.location == tampere
        assert cat.weight == 3.5

    @pytest.mark.asyncio
    async def test_non_owner_denied(self, cats, alice, bob, tampere):
        created = await cats.create(alice, body(location=tampere))
        with pytest.raises(AccessDenied):
            await cats.update(bob, created.id, CatUpdate(name="Stolen"))

    @pytest.mark.asyncio
    async def test_admin_ordinary_update_denied(self, cats, alice, admin, tampere):
        created = await cats.create(alice, body(location=tampere))
        with pytest.raises(AccessDenied):
            await cats.update(admin, created.id, CatUpdate(name="Nope"))

    @pytest.mark.asyncio
    async def test_owner_update_ignores_owner_field(self, cats, alice, bob, tampere):
        created = await cats.create(alice, body(location=tampere))
        cat = await cats.update(alice, created.id, CatUpdate.model_validate({"owner": bob.id, "name": "x"}))
        assert cat.owner == alice.id

    @pytest.mark.asyncio
    async def test_missing(self, cats, alice):
        with pytest.raises(NotFound):
            await cats.update(alice, "missing", CatUpdate(name="x"))

    @pytest.mark.asyncio
    async def test_admin_reassigns_owner(self, cats, alice, bob, admin, tampere):
        created = await cats.create(alice, body(location=tampere))
        cat = await cats.update_admin(admin, created.id, CatAdminUpdate(owner=bob.id))
        assert cat.owner == bob.id

    @pytest.mark.asyncio
    async def test_admin_path_requires_admin(self, cats, alice, tampere):
        created = await cats.create(alice, body(location=tampere))
        with pytest.raises(AccessDenied):
            await cats.update_admin(alice, created.id, CatAdminUpdate(name="x"))

    @pytest.mark.asyncio
    async def test_admin_path_missing(self, cats, admin):
        with pytest.raises(NotFound):
            await cats.update_admin(admin, "missing", CatAdminUpdate(name="x"))


class TestDelete:
    """고양이 삭제 테스트"""

    @pytest.mark.asyncio
    async def test_owner_delete(self, cats, alice, tampere):
        created = await cats.create(alice, body(location=tampere))
        deleted = await cats.delete(alice, created.id)
        assert deleted.id == created.id
        with pytest.raises(NotFound):
            await cats.get(created.id)

    @pytest.mark.asyncio
    async def test_non_owner_gets_not_found(self, cats, alice, bob, tampere):
        """다른 사용자의 고양이 삭제는 존재하지 않는 것과 구별되지 않음"""
        created = await cats.create(alice, body(location=tampere))
        with pytest.raises(NotFound):
            await cats.delete(bob, created.id)
        assert (await cats.get(created.id)).id == created.id

    @pytest.mark.asyncio
    async def test_owner_delete_requires_principal(self, cats):
        with pytest.raises(NotAuthenticated):
            await cats.delete(None, "anything")

    @pytest.mark.asyncio
    async def test_admin_delete(self, cats, alice, admin, tampere):
        created = await cats.create(alice, body(location=tampere))
        assert (await cats.delete_admin(admin, created.id)).id == created.id

    @pytest.mark.asyncio
    async def test_admin_delete_missing_is_not_found(self, cats, admin):
        with pytest.raises(NotFound):
            await cats.delete_admin(admin, "missing")

    @pytest.mark.asyncio
    async def test_admin_delete_by_non_admin_is_denied(self, cats, alice, tampere):
        created = await cats.create(alice, body(location=tampere))
        with pytest.raises(AccessDenied):
            await cats.delete_admin(alice, created.id)
