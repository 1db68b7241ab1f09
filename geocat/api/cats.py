"""
Cat routes for the GeoCat HTTP API.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from geocat.core.models import CatAdminUpdate, CatCreate, CatOutput, CatUpdate, Coordinate, Principal
from geocat.orchestrators import CatOrchestrator
from .deps import get_cats, get_principal, resolved_coords

router = APIRouter(prefix="/cats", tags=["cats"])

@router.get("", response_model=List[CatOutput])
async def cat_list(limit: Optional[str] = None, offset: Optional[str] = None,
                   cats: CatOrchestrator = Depends(get_cats)):
    """고양이 목록 (limit/offset 는 잘못된 값이어도 오류 없음)"""
    return await cats.list_paged(limit, offset)

@router.post("")
async def cat_post(body: CatCreate,
                   coords: Optional[Coordinate] = Depends(resolved_coords),
                   principal: Optional[Principal] = Depends(get_principal),
                   cats: CatOrchestrator = Depends(get_cats)):
    cat = await cats.create(principal, body, coords)
    return {"message": "Cat created", "data": cat}

@router.get("/area", response_model=List[CatOutput])
async def cat_by_bounding_box(top_right: Optional[str] = Query(None, alias="topRight"),
                              bottom_left: Optional[str] = Query(None, alias="bottomLeft"),
                              cats: CatOrchestrator = Depends(get_cats)):
    """두 대각 꼭짓점 사이의 고양이"""
    return await cats.list_in_bounding_box(top_right, bottom_left)

@router.get("/user", response_model=List[CatOutput])
async def cat_by_user(principal: Optional[Principal] = Depends(get_principal),
                      cats: CatOrchestrator = Depends(get_cats)):
    return await cats.list_by_owner(principal)

@router.put("/admin/{cat_id}")
async def cat_put_admin(cat_id: str, body: CatAdminUpdate,
                        coords: Optional[Coordinate] = Depends(resolved_coords),
                        principal: Optional[Principal] = Depends(get_principal),
                        cats: CatOrchestrator = Depends(get_cats)):
    cat = await cats.update_admin(principal, cat_id, body, coords)
    return {"message": "Cat updated", "data": cat}

@router.delete("/admin/{cat_id}")
async def cat_delete_admin(cat_id: str,
                           principal: Optional[Principal] = Depends(get_principal),
                           cats: CatOrchestrator = Depends(get_cats)):
    cat = await cats.delete_admin(principal, cat_id)
    return {"message": "Cat deleted", "data": cat}

@router.get("/{cat_id}", response_model=CatOutput)
async def cat_get(cat_id: str, cats: CatOrchestrator = Depends(get_cats)):
    return await cats.get(cat_id)

@router.put("/{cat_id}")
async def cat_put(cat_id: str, body: CatUpdate,
                  coords: Optional[Coordinate] = Depends(resolved_coords),
                  principal: Optional[Principal] = Depends(get_principal),
                  cats: CatOrchestrator = Depends(get_cats)):
    cat = await cats.update(principal, cat_id, body, coords)
    return {"message": "Cat updated", "data": cat}

@router.delete("/{cat_id}")
async def cat_delete(cat_id: str,
                     principal: Optional[Principal] = Depends(get_principal),
                     cats: CatOrchestrator = Depends(get_cats)):
    cat = await cats.delete(principal, cat_id)
    return {"message": "Cat deleted", "data": cat}
