"""Sport taxonomy routes."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from courtfinder.core.database import get_db
from courtfinder.core.dependencies import require_sports, sports_enabled
from courtfinder.schemas import SportCreate, SportOut, SportUpdate
from courtfinder.services import sports as sport_service
from courtfinder.services.sports import SportNotFound

router = APIRouter(prefix="/sports", tags=["sports"])


@router.get("", response_model=list[SportOut])
async def list_sports(has_sports: bool = Depends(sports_enabled), db: AsyncSession = Depends(get_db)):
    if not has_sports:
        return []
    return await sport_service.list_sports(db)


@router.post(
    "",
    response_model=SportOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_sports)],
)
async def create_sport(body: SportCreate, db: AsyncSession = Depends(get_db)):
    name, name_zh = sport_service.clean_names(body.name or body.name_en, body.name_zh)
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="name or name_en required")
    sport = await sport_service.create_sport(db, name, name_zh)
    await db.commit()
    return sport


@router.put("/{sport_id}", response_model=SportOut, dependencies=[Depends(require_sports)])
async def update_sport(sport_id: int, body: SportUpdate, db: AsyncSession = Depends(get_db)):
    name, name_zh = sport_service.clean_names(body.name, body.name_zh)
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="name required")
    try:
        sport = await sport_service.update_sport(db, sport_id, name, name_zh)
    except SportNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from None
    await db.commit()
    return sport


@router.delete("/{sport_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_sports)])
async def delete_sport(sport_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a sport and its venue links; the venues themselves stay."""
    try:
        await sport_service.delete_sport(db, sport_id)
        await db.commit()
    except SportNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
