"""User read/write models and the projections between them.

The directory service owns ``User`` records; the UI only edits a
``UserFormData`` draft. The directory is a nested ``{id, name}`` object on
the read side and a bare name on the write side. Only the name survives the
round trip.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict, replace
from typing import Any, Optional

DEFAULT_DIRECTORY = "default"


def _text(value: Any) -> str:
    """Scalar service value as display text; None becomes an empty string."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise TypeError(f"expected text, got {type(value).__name__}")
    return value if isinstance(value, str) else str(value)


def _optional_text(value: Any) -> Optional[str]:
    return None if value is None else _text(value)


@dataclass(frozen=True)
class Picture:
    """Avatar metadata attached to a user (display only)."""
    id: int
    name: str = ""
    media_type: str = ""
    width: int = 0
    height: int = 0
    size: int = 0
    thumbnail_url: str = ""
    raw: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Picture":
        return cls(
            id=data.get("id", 0),
            name=data.get("name", ""),
            media_type=data.get("media_type", ""),
            width=data.get("width", 0),
            height=data.get("height", 0),
            size=data.get("size", 0),
            thumbnail_url=data.get("thumbnail_url", ""),
            raw=data.get("raw", ""),
        )


@dataclass(frozen=True)
class DirectoryRef:
    """Reference to the directory a user belongs to."""
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DirectoryRef":
        return cls(id=data.get("id", 0), name=_text(data.get("name")))


@dataclass(frozen=True)
class User:
    """User representation as returned by ``/api/users``."""
    id: int
    uid: str
    name: str
    given_name: Optional[str] = None
    middle_name: Optional[str] = None
    family_name: Optional[str] = None
    nickname: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    avatar_url: Optional[str] = None
    picture: Optional[Picture] = None
    directory: Optional[DirectoryRef] = None
    presence: Optional[str] = None
    comment: Optional[str] = None
    tags: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: str = ""
    updated_at: str = ""
    is_trashed: bool = False

    @property
    def directory_name(self) -> str:
        """Directory name for display, ``default`` when the user has none."""
        if self.directory and self.directory.name:
            return self.directory.name
        return DEFAULT_DIRECTORY

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        """Build a user from a service payload, tolerating missing optionals.

        Raises:
            TypeError: If ``tags`` is not a list or ``metadata`` not an object
        """
        picture = data.get("picture")
        directory = data.get("directory")
        tags = data.get("tags") or ()
        if not isinstance(tags, (list, tuple)):
            raise TypeError(f"tags must be a list, got {type(tags).__name__}")
        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise TypeError(f"metadata must be an object, got {type(metadata).__name__}")
        return cls(
            id=data.get("id", 0),
            uid=_text(data.get("uid")),
            name=_text(data.get("name")),
            given_name=data.get("given_name"),
            middle_name=data.get("middle_name"),
            family_name=data.get("family_name"),
            nickname=data.get("nickname"),
            email=_optional_text(data.get("email")),
            phone_number=data.get("phone_number"),
            avatar_url=data.get("avatar_url"),
            picture=Picture.from_dict(picture) if isinstance(picture, dict) else None,
            directory=DirectoryRef.from_dict(directory) if isinstance(directory, dict) else None,
            presence=data.get("presence"),
            comment=data.get("comment"),
            tags=tuple(_text(tag) for tag in tags),
            metadata=dict(metadata),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
            is_trashed=bool(data.get("is_trashed", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["tags"] = list(self.tags)
        return data


@dataclass(frozen=True)
class UserFormData:
    """Editable projection of a user, as held by the form."""
    uid: str = ""
    name: str = ""
    email: Optional[str] = ""
    directory: Optional[str] = DEFAULT_DIRECTORY
    given_name: Optional[str] = None
    middle_name: Optional[str] = None
    family_name: Optional[str] = None
    nickname: Optional[str] = None
    phone_number: Optional[str] = None
    comment: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    metadata: Optional[dict[str, Any]] = None

    @classmethod
    def empty(cls) -> "UserFormData":
        return cls()

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_user(cls, user: User) -> "UserFormData":
        """Populate a draft from an existing user (``directory.id`` is dropped)."""
        return cls(
            uid=user.uid,
            name=user.name,
            email=user.email or "",
            directory=user.directory_name,
            given_name=user.given_name,
            middle_name=user.middle_name,
            family_name=user.family_name,
            nickname=user.nickname,
            phone_number=user.phone_number,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserFormData":
        known = {name: data[name] for name in cls.field_names() if name in data}
        if known.get("tags") is not None:
            known["tags"] = tuple(known["tags"])
        return cls(**known)

    def with_field(self, name: str, value: Any) -> "UserFormData":
        if name not in self.field_names():
            raise ValueError(f"Unknown form field: {name}")
        if name == "tags" and value is not None:
            value = tuple(value)
        return replace(self, **{name: value})

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.tags is not None:
            data["tags"] = list(self.tags)
        return data

    def to_payload(self, include_uid: bool = True) -> dict[str, Any]:
        """JSON body for create/update; unset optionals are left out."""
        payload = {key: value for key, value in self.to_dict().items() if value is not None}
        if not include_uid:
            payload.pop("uid", None)
        return payload
