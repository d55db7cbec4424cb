"""Keys browser REST routes."""

from typing import Annotated

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query

from kvb.application.api.v1.encoding import KeyEncoding, from_key_name, to_key_name
from kvb.application.api.v1.routes.schemas import (
    DeleteKeysBody,
    DeleteKeysResponse,
    GetKeyInfoBody,
    GetKeysBody,
    GetKeysInfoBody,
    GetKeysResponse,
    KeyInfoResponse,
    KeyTtlResponse,
    RenameKeyBody,
    RenameKeyResponse,
    UpdateTtlBody,
)
from kvb.domain.keys.model import GetKeys, GetKeysInfo, RenameKey, UpdateKeyTtl
from kvb.domain.keys.service import KeysService
from kvb.domain.shared.model.client_metadata import ClientMetadata

router = APIRouter(prefix="/databases/{database_id}/keys", tags=["Keys"], route_class=DishkaRoute)


def client_metadata(
    database_id: str,
    db: Annotated[int | None, Query(ge=0)] = None,
) -> ClientMetadata:
    return ClientMetadata(database_id=database_id, db=db)


Metadata = Annotated[ClientMetadata, Depends(client_metadata)]
Encoding = Annotated[KeyEncoding, Query()]


@router.post("", response_model=list[GetKeysResponse])
async def get_keys(
    body: GetKeysBody,
    metadata: Metadata,
    service: FromDishka[KeysService],
    encoding: Encoding = KeyEncoding.UTF8,
) -> list[GetKeysResponse]:
    dto = GetKeys(
        cursor=body.cursor,
        count=body.count,
        match=body.match,
        type=body.type,
        keys_info=body.keys_info,
    )
    results = await service.get_keys(metadata, dto)
    return [GetKeysResponse.build(result, encoding) for result in results]


@router.post("/get-metadata", response_model=list[KeyInfoResponse])
async def get_keys_info(
    body: GetKeysInfoBody,
    metadata: Metadata,
    service: FromDishka[KeysService],
    encoding: Encoding = KeyEncoding.UTF8,
) -> list[KeyInfoResponse]:
    dto = GetKeysInfo(keys=[to_key_name(key, encoding) for key in body.keys], type=body.type)
    infos = await service.get_keys_info(metadata, dto)
    return [KeyInfoResponse.build(info, encoding) for info in infos]


@router.post("/get-info", response_model=KeyInfoResponse)
async def get_key_info(
    body: GetKeyInfoBody,
    metadata: Metadata,
    service: FromDishka[KeysService],
    encoding: Encoding = KeyEncoding.UTF8,
) -> KeyInfoResponse:
    info = await service.get_key_info(metadata, to_key_name(body.key_name, encoding))
    return KeyInfoResponse.build(info, encoding)


@router.delete("", response_model=DeleteKeysResponse)
async def delete_keys(
    body: DeleteKeysBody,
    metadata: Metadata,
    service: FromDishka[KeysService],
    encoding: Encoding = KeyEncoding.UTF8,
) -> DeleteKeysResponse:
    result = await service.delete_keys(metadata, [to_key_name(key, encoding) for key in body.key_names])
    return DeleteKeysResponse(affected=result.affected)


@router.patch("/name", response_model=RenameKeyResponse)
async def rename_key(
    body: RenameKeyBody,
    metadata: Metadata,
    service: FromDishka[KeysService],
    encoding: Encoding = KeyEncoding.UTF8,
) -> RenameKeyResponse:
    dto = RenameKey(
        key_name=to_key_name(body.key_name, encoding),
        new_key_name=to_key_name(body.new_key_name, encoding),
    )
    result = await service.rename_key(metadata, dto)
    return RenameKeyResponse(key_name=from_key_name(result.key_name, encoding))


@router.patch("/ttl", response_model=KeyTtlResponse)
async def update_ttl(
    body: UpdateTtlBody,
    metadata: Metadata,
    service: FromDishka[KeysService],
    encoding: Encoding = KeyEncoding.UTF8,
) -> KeyTtlResponse:
    dto = UpdateKeyTtl(key_name=to_key_name(body.key_name, encoding), ttl=body.ttl)
    result = await service.update_ttl(metadata, dto)
    return KeyTtlResponse(ttl=result.ttl)
