"""Request and result shapes for the keys service."""

from pydantic import BaseModel, Field

from kvb.domain.keys.model.key import DEFAULT_MATCH, KeyName, KeyType


class GetKeys(BaseModel):
    cursor: str = "0"
    count: int = Field(default=15, ge=1)
    match: str = DEFAULT_MATCH
    type: KeyType | None = None
    keys_info: bool = True


class GetKeysInfo(BaseModel):
    keys: list[KeyName] = Field(min_length=1)
    type: KeyType | None = None


class RenameKey(BaseModel):
    key_name: KeyName
    new_key_name: KeyName


class UpdateKeyTtl(BaseModel):
    key_name: KeyName
    ttl: int  # -1 removes the expiry


class DeleteKeysResult(BaseModel):
    affected: int


class RenameKeyResult(BaseModel):
    key_name: KeyName


class KeyTtlResult(BaseModel):
    ttl: int
