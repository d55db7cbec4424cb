"""Request and response bodies for the keys API (camelCase on the wire)."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kvb.application.api.v1.encoding import KeyEncoding, RequestKeyName, ResponseKeyName, from_key_name
from kvb.domain.keys.model import DEFAULT_MATCH, GetKeysResult, KeyInfo, KeyType


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GetKeysBody(ApiModel):
    cursor: str = "0"
    count: int = Field(default=15, ge=1)
    match: str = DEFAULT_MATCH
    type: KeyType | None = None
    keys_info: bool = True


class GetKeysInfoBody(ApiModel):
    keys: list[RequestKeyName] = Field(min_length=1)
    type: KeyType | None = None


class GetKeyInfoBody(ApiModel):
    key_name: RequestKeyName


class DeleteKeysBody(ApiModel):
    key_names: list[RequestKeyName] = Field(min_length=1)


class RenameKeyBody(ApiModel):
    key_name: RequestKeyName
    new_key_name: RequestKeyName


class UpdateTtlBody(ApiModel):
    key_name: RequestKeyName
    ttl: int  # -1 removes the expiry, other negative values expire the key at once


class KeyInfoResponse(ApiModel):
    name: ResponseKeyName
    type: KeyType
    ttl: int | None = None
    size: int | None = None
    length: int | None = None
    encoding: str | None = None

    @classmethod
    def build(cls, info: KeyInfo, encoding: KeyEncoding) -> "KeyInfoResponse":
        return cls(
            name=from_key_name(info.name, encoding),
            type=info.type,
            ttl=info.ttl,
            size=info.size,
            length=info.length,
            encoding=info.encoding,
        )


class GetKeysResponse(ApiModel):
    cursor: int
    total: int | None = None
    scanned: int
    keys: list[KeyInfoResponse]
    host: str | None = None
    port: int | None = None

    @classmethod
    def build(cls, result: GetKeysResult, encoding: KeyEncoding) -> "GetKeysResponse":
        return cls(
            cursor=result.cursor,
            total=result.total,
            scanned=result.scanned,
            keys=[KeyInfoResponse.build(info, encoding) for info in result.keys],
            host=result.host,
            port=result.port,
        )


class DeleteKeysResponse(ApiModel):
    affected: int


class RenameKeyResponse(ApiModel):
    key_name: ResponseKeyName


class KeyTtlResponse(ApiModel):
    ttl: int
