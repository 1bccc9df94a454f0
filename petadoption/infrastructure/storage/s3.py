from __future__ import annotations

from dataclasses import dataclass

import boto3

from petadoption.infrastructure.storage.ports import StorageService


@dataclass(slots=True)
class S3StorageService(StorageService):
    bucket: str
    region: str
    prefix: str = ""
    public_url_base: str | None = None

    def __post_init__(self) -> None:
        self._s3 = boto3.client("s3", region_name=self.region)

    def _full_key(self, key: str) -> str:
        if self.prefix and not key.startswith(self.prefix):
            return f"{self.prefix}{key}"
        return key

    async def put_object(self, key: str, data: bytes, content_type: str) -> None:
        self._s3.put_object(
            Bucket=self.bucket, Key=self._full_key(key), Body=data, ContentType=content_type
        )

    async def get_public_url(self, key: str) -> str:
        full_key = self._full_key(key)
        if self.public_url_base:
            base = self.public_url_base.rstrip("/")
            return f"{base}/{full_key}"
        # default AWS URL
        if self.region == "us-east-1":
            return f"https://{self.bucket}.s3.amazonaws.com/{full_key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{full_key}"

    async def delete_object(self, key: str) -> None:
        self._s3.delete_object(Bucket=self.bucket, Key=self._full_key(key))
