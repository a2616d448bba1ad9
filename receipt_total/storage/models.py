import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredFile:
    """Location of an object in the object store."""

    bucket: str
    path: str

    @property
    def extension(self) -> str:
        name = self.path.rsplit("/", 1)[-1]
        if "." not in name:
            return ""
        return name.rsplit(".", 1)[-1].lower()


@dataclass(frozen=True)
class GenerativePart:
    """Inline file payload in the shape vision models expect."""

    mime_type: str
    base64_data: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.base64_data)
