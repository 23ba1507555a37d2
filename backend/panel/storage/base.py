"""
Storage interface shared by the in-memory and SQL backends.

A ``Storage`` owns one ``Repository`` per table plus the handful of
entity-specific queries the routers and jobs need. Routers and background jobs
only ever talk to this interface, so both backends behave the same.
"""

import abc
from typing import Any, Dict, Generic, List, Optional, TypeVar

from panel.core.clock import Clock, utcnow
from panel.modules.api_keys.models import ApiKey
from panel.modules.auth.models import AuthSession
from panel.modules.backups.models import Backup
from panel.modules.databases.models import Database
from panel.modules.dns.models import DnsRecord
from panel.modules.domains.models import Domain
from panel.modules.email_accounts.models import EmailAccount
from panel.modules.files.models import FileEntry, FileVersion
from panel.modules.knowledge_base.models import KnowledgeBase
from panel.modules.notifications.models import Notification
from panel.modules.packages.models import HostingPackage
from panel.modules.projects.models import CodeProject
from panel.modules.recommendations.models import Recommendation
from panel.modules.security.models import SecurityScan
from panel.modules.server_stats.models import ServerStats
from panel.modules.ssl.models import SslCertificate
from panel.modules.users.models import User
from panel.modules.webmail.models import WebmailSettings
from panel.modules.widgets.models import DashboardWidget

T = TypeVar("T")

# Attribute name on Storage -> mapped model
TABLES = {
    "users": User,
    "sessions": AuthSession,
    "packages": HostingPackage,
    "domains": Domain,
    "dns_records": DnsRecord,
    "ssl_certificates": SslCertificate,
    "email_accounts": EmailAccount,
    "databases": Database,
    "files": FileEntry,
    "file_versions": FileVersion,
    "server_stats": ServerStats,
    "notifications": Notification,
    "backups": Backup,
    "api_keys": ApiKey,
    "widgets": DashboardWidget,
    "security_scans": SecurityScan,
    "webmail_settings": WebmailSettings,
    "code_projects": CodeProject,
    "knowledge_base": KnowledgeBase,
    "recommendations": Recommendation,
}


class Repository(abc.ABC, Generic[T]):
    """CRUD contract for one table.

    Filters are equality matches on column names. A list, tuple or set value
    matches any of its members, and ``None`` inside it matches NULL.
    """

    def __init__(self, model, clock: Clock):
        self.model = model
        self.clock = clock
        self.timestamp_field: str = getattr(model, "timestamp_field", "created_at")
        self.updated_field: Optional[str] = getattr(model, "updated_field", None)
        self.columns = [column.key for column in model.__table__.columns]

    @abc.abstractmethod
    def get(self, id: int) -> Optional[T]:
        ...

    @abc.abstractmethod
    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        *,
        newest_first: bool = False,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[T]:
        ...

    @abc.abstractmethod
    def count(self, **filters) -> int:
        ...

    @abc.abstractmethod
    def create(self, data: Dict[str, Any]) -> T:
        ...

    @abc.abstractmethod
    def update(self, id: int, data: Dict[str, Any]) -> Optional[T]:
        ...

    @abc.abstractmethod
    def delete(self, id: int) -> bool:
        ...

    def first(self, **filters) -> Optional[T]:
        rows = self.list(filters, limit=1)
        return rows[0] if rows else None

    def _stamped(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = {key: value for key, value in data.items() if key in self.columns and key != "id"}
        if values.get(self.timestamp_field) is None:
            values[self.timestamp_field] = self.clock()
        return values

    def _patch(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = {key: value for key, value in data.items() if key in self.columns and key != "id"}
        if self.updated_field:
            values[self.updated_field] = self.clock()
        return values


class Storage(abc.ABC):
    """All tables of the panel behind one object."""

    users: Repository[User]
    sessions: Repository[AuthSession]
    packages: Repository[HostingPackage]
    domains: Repository[Domain]
    dns_records: Repository[DnsRecord]
    ssl_certificates: Repository[SslCertificate]
    email_accounts: Repository[EmailAccount]
    databases: Repository[Database]
    files: Repository[FileEntry]
    file_versions: Repository[FileVersion]
    server_stats: Repository[ServerStats]
    notifications: Repository[Notification]
    backups: Repository[Backup]
    api_keys: Repository[ApiKey]
    widgets: Repository[DashboardWidget]
    security_scans: Repository[SecurityScan]
    webmail_settings: Repository[WebmailSettings]
    code_projects: Repository[CodeProject]
    knowledge_base: Repository[KnowledgeBase]
    recommendations: Repository[Recommendation]

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or utcnow
        for name, model in TABLES.items():
            setattr(self, name, self._repository(model))

    @abc.abstractmethod
    def _repository(self, model) -> Repository:
        ...

    def close(self) -> None:
        pass

    # --- Users ---
    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.users.first(email=email)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.users.first(username=username)

    def get_users_count(self) -> int:
        return self.users.count()

    def update_user_2fa(self, user_id: int, secret: str, enabled: bool) -> Optional[User]:
        return self.users.update(user_id, {"two_factor_secret": secret, "two_factor_enabled": enabled})

    def disable_2fa(self, user_id: int) -> Optional[User]:
        return self.users.update(user_id, {"two_factor_secret": None, "two_factor_enabled": False})

    # --- Hosting packages ---
    def get_default_package(self) -> Optional[HostingPackage]:
        return self.packages.first(status="active") or self.packages.first()

    def count_users_on_package(self, package_id: int) -> int:
        return self.users.count(package_id=package_id)

    # --- DNS / SSL ---
    def get_dns_records_by_domain_id(self, domain_id: int) -> List[DnsRecord]:
        return self.dns_records.list({"domain_id": domain_id})

    def get_ssl_certificates_by_domain_id(self, domain_id: int) -> List[SslCertificate]:
        return self.ssl_certificates.list({"domain_id": domain_id})

    # --- Files ---
    def get_file_entries_by_user_id_and_path(self, user_id: int, path: str) -> List[FileEntry]:
        return self.files.list({"user_id": user_id, "path": path})

    def get_file_versions(self, file_id: int) -> List[FileVersion]:
        return self.file_versions.list({"file_id": file_id}, newest_first=True)

    # --- Server stats ---
    def get_latest_server_stats(self) -> Optional[ServerStats]:
        rows = self.server_stats.list(newest_first=True, limit=1)
        return rows[0] if rows else None

    def get_server_stats_history(self, limit: int = 24) -> List[ServerStats]:
        return self.server_stats.list(newest_first=True, limit=max(limit, 0))

    # --- Notifications ---
    def get_user_notifications(self, user_id: int, limit: int = 50) -> List[Notification]:
        # Own notifications plus broadcasts
        return self.notifications.list({"user_id": (user_id, None)}, newest_first=True, limit=max(limit, 0))

    def mark_notification_as_read(self, id: int) -> Optional[Notification]:
        return self.notifications.update(id, {"is_read": True})

    # --- Backups / API keys / widgets ---
    def get_user_backups(self, user_id: int) -> List[Backup]:
        return self.backups.list({"user_id": user_id}, newest_first=True)

    def get_user_api_keys(self, user_id: int) -> List[ApiKey]:
        return self.api_keys.list({"user_id": user_id}, newest_first=True)

    def get_api_key_by_hash(self, key_hash: str) -> Optional[ApiKey]:
        return self.api_keys.first(key_hash=key_hash)

    def get_user_dashboard_widgets(self, user_id: int) -> List[DashboardWidget]:
        return self.widgets.list({"user_id": user_id}, order_by="position")

    # --- Security scans ---
    def get_latest_security_scan(self) -> Optional[SecurityScan]:
        rows = self.security_scans.list(newest_first=True, limit=1)
        return rows[0] if rows else None

    # --- Sessions ---
    def get_session_by_token_id(self, token_id: str) -> Optional[AuthSession]:
        return self.sessions.first(token_id=token_id)

    # --- Webmail ---
    def get_webmail_settings(self, user_id: int) -> Optional[WebmailSettings]:
        return self.webmail_settings.first(user_id=user_id)
