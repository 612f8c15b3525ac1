"""
Business logic services for gdir.
"""

from gdir.services.access_control import AccessSession
from gdir.services.account_import import AccountImporter
from gdir.services.deploy import DeploySynchronizer
from gdir.services.record_store import RecordStore
from gdir.services.repository import RepositoryReconciler
from gdir.services.static_assets import StaticAssetSync
from gdir.services.user_store import UserStore

__all__ = [
    "AccessSession",
    "AccountImporter",
    "DeploySynchronizer",
    "RecordStore",
    "RepositoryReconciler",
    "StaticAssetSync",
    "UserStore",
]
