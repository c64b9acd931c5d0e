"""Shared route dependencies."""

from fastapi import Depends

from wearaware.db.session import get_session
from wearaware.services.scans import ScanService
from wearaware.services.users import UserService

_user_service = UserService()
_scan_service = ScanService(_user_service)


def get_user_service() -> UserService:
    return _user_service


def get_scan_service() -> ScanService:
    return _scan_service


SessionDependency = Depends(get_session)
UserServiceDependency = Depends(get_user_service)
ScanServiceDependency = Depends(get_scan_service)
