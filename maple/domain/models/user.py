"""
ユーザーモデル
モック認証で合成されるローカルの識別情報
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class UserIdentity:
    """ローカルに合成されたユーザー"""

    email: str
    username: str
    avatar_name: str = "maple_avatar_1"
    join_date: datetime = field(default_factory=datetime.now)
    profile_image: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "avatar_name": self.avatar_name,
            "join_date": self.join_date.isoformat(),
            "profile_image": self.profile_image,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserIdentity":
        return cls(
            id=data["id"],
            email=data["email"],
            username=data["username"],
            avatar_name=data.get("avatar_name", "maple_avatar_1"),
            join_date=datetime.fromisoformat(data.get("join_date", datetime.now().isoformat())),
            profile_image=data.get("profile_image"),
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """識別情報の購読用スナップショット"""

    is_authenticated: bool
    is_guest: bool
    display_name: str
    user: UserIdentity | None = None
