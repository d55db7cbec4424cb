"""Registered databases and their per-database browser state."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from kvb.application.api.v1.routes.schemas import ApiModel
from kvb.domain.database.model import ConnectionType
from kvb.domain.database.service import DatabaseService
from kvb.domain.history.model import BrowserHistoryMode
from kvb.domain.history.service import BrowserHistoryService
from kvb.domain.keys.model import KeyType
from kvb.domain.recommendation.model import RecommendationName
from kvb.domain.recommendation.service import RecommendationService
from kvb.domain.shared.model.client_metadata import ClientMetadata

router = APIRouter(prefix="/databases", tags=["Databases"], route_class=DishkaRoute)


class DatabaseResponse(ApiModel):
    id: str
    name: str
    host: str
    port: int
    connection_type: ConnectionType
    db: int


class HistoryFilterResponse(ApiModel):
    type: KeyType | None = None
    match: str


class HistoryResponse(ApiModel):
    id: str
    filter: HistoryFilterResponse
    mode: BrowserHistoryMode
    created_at: datetime


class RecommendationResponse(ApiModel):
    name: RecommendationName
    created_at: datetime


@router.get("", response_model=list[DatabaseResponse])
async def list_databases(service: FromDishka[DatabaseService]) -> list[DatabaseResponse]:
    databases = await service.list()
    return [
        DatabaseResponse(
            id=database.id,
            name=database.name,
            host=database.host,
            port=database.port,
            connection_type=database.connection_type,
            db=database.db,
        )
        for database in databases
    ]


@router.get("/{database_id}/history", response_model=list[HistoryResponse])
async def list_history(
    database_id: str,
    databases: FromDishka[DatabaseService],
    service: FromDishka[BrowserHistoryService],
    mode: BrowserHistoryMode = BrowserHistoryMode.PATTERN,
) -> list[HistoryResponse]:
    await databases.get(database_id)
    entries = await service.list(ClientMetadata(database_id=database_id), mode)
    return [
        HistoryResponse(
            id=entry.id,
            filter=HistoryFilterResponse(type=entry.filter.type, match=entry.filter.match),
            mode=entry.mode,
            created_at=entry.created_at,
        )
        for entry in entries
    ]


@router.get("/{database_id}/recommendations", response_model=list[RecommendationResponse])
async def list_recommendations(
    database_id: str,
    databases: FromDishka[DatabaseService],
    service: FromDishka[RecommendationService],
) -> list[RecommendationResponse]:
    await databases.get(database_id)
    recommendations = await service.list(database_id)
    return [RecommendationResponse(name=r.name, created_at=r.created_at) for r in recommendations]
