"""
識別情報サービス（モック）
表示名とゲスト/認証済みフラグを提供する。実際の資格情報は扱わない。
"""

from __future__ import annotations

from ...core.exceptions import AuthenticationError
from ...core.logging import get_logger, log_business_event
from ..events import Publisher
from ..models.user import SessionSnapshot, UserIdentity
from ..ports.scheduler_port import IScheduler

logger = get_logger("identity")


class IdentityService:
    """
    モック認証サービス

    ログイン・サインアップは即座に True を返し、login_delay 秒後に
    ローカルの識別情報を合成して認証済みになる。
    """

    def __init__(self, scheduler: IScheduler, login_delay: float = 0.5):
        self._scheduler = scheduler
        self._login_delay = login_delay

        self._is_authenticated = False
        self._is_guest = True
        self._current_user: UserIdentity | None = None

        # 端末内のフラグのみ（永続化しない）
        self.last_logged_in_email = ""
        self.has_login_history = False

        self._publisher: Publisher[SessionSnapshot] = Publisher("identity")

    @property
    def is_authenticated(self) -> bool:
        return self._is_authenticated

    @property
    def is_guest(self) -> bool:
        return self._is_guest

    @property
    def current_user(self) -> UserIdentity | None:
        return self._current_user

    @property
    def display_name(self) -> str:
        if self._is_guest:
            return "Guest"
        return self._current_user.username if self._current_user else "User"

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            is_authenticated=self._is_authenticated,
            is_guest=self._is_guest,
            display_name=self.display_name,
            user=self._current_user,
        )

    def subscribe(self, callback):
        return self._publisher.subscribe(callback)

    def continue_as_guest(self) -> None:
        self._is_guest = True
        self._is_authenticated = False
        self._publish()

    def login(self, email: str, password: str) -> bool:
        """ログイン（モック）"""
        email = self._require_email(email)
        username = email.split("@")[0] or "User"
        self._scheduler.schedule(
            self._login_delay, lambda: self._complete_sign_in(email, username)
        )
        return True

    def signup(self, email: str, username: str, password: str) -> bool:
        """サインアップ（モック）"""
        email = self._require_email(email)
        username = username.strip() or email.split("@")[0] or "User"
        self._scheduler.schedule(
            self._login_delay, lambda: self._complete_sign_in(email, username)
        )
        return True

    def logout(self) -> None:
        """ログアウト（ゲストモードのフラグは変更しない）"""
        self._is_authenticated = False
        self._current_user = None
        log_business_event(logger, "logout")
        self._publish()

    def _require_email(self, email: str) -> str:
        if not email or not email.strip():
            raise AuthenticationError("メールアドレスは必須です", email=email)
        return email.strip()

    def _complete_sign_in(self, email: str, username: str) -> None:
        self._is_authenticated = True
        self._is_guest = False
        self._current_user = UserIdentity(
            email=email,
            username=username,
            join_date=self._scheduler.now(),
        )
        self.last_logged_in_email = email
        self.has_login_history = True
        log_business_event(logger, "signed_in", user_id=self._current_user.id)
        self._publish()

    def _publish(self) -> None:
        self._publisher.publish(self.snapshot())
