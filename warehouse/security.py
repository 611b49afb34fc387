"""
Login gate and token handling.
- Fixed superadmin pair, then the credentials file (username, password per line)
- Stored passwords may be bcrypt hashes (passlib) or plain text
- JWT bearer tokens via python-jose for the HTTP driver
"""
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Dict, Any, List, Tuple, Union
import hmac
import logging

from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext

from warehouse.config import settings
from warehouse.schemas.auth import CurrentUser, UserRole

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

security = HTTPBearer()


def get_password_hash(password: str) -> str:
    """Hash a password for storage in the credentials file"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, stored_password: str) -> bool:
    """Verify against a bcrypt hash, or compare with a plain text entry"""
    if pwd_context.identify(stored_password, required=False):
        return pwd_context.verify(plain_password, stored_password)
    return hmac.compare_digest(plain_password.encode(), stored_password.encode())


def load_credentials(path: Union[str, Path]) -> List[Tuple[str, str]]:
    """
    Parse `username, password` lines.
    The password ends at the first whitespace; lines without a comma are ignored.
    """
    credentials = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            username, sep, rest = line.partition(",")
            username = username.strip()
            fields = rest.split()
            if not sep or not username or not fields:
                continue
            credentials.append((username, fields[0]))
    return credentials


def check_credentials_from_file(username: str, password: str, path: Optional[Union[str, Path]] = None) -> bool:
    path = Path(path or settings.USERS_FILE)
    try:
        credentials = load_credentials(path)
    except OSError as e:
        logger.error(f"Failed to open credentials file {path}: {e}")
        return False

    for file_username, file_password in credentials:
        if file_username == username and verify_password(password, file_password):
            return True
    return False


def is_superadmin(username: str, password: str) -> bool:
    return (
        hmac.compare_digest(username.encode(), settings.SUPERADMIN_USERNAME.encode())
        and verify_password(password, settings.SUPERADMIN_PASSWORD)
    )


def authenticate_user(username: str, password: str) -> Optional[CurrentUser]:
    if is_superadmin(username, password):
        return CurrentUser(username=username, role=UserRole.ADMIN)
    if check_credentials_from_file(username, password):
        return CurrentUser(username=username, role=UserRole.STAFF)
    logger.warning(f"Failed login attempt for username: {username}")
    return None


def login(username: str, password: str) -> bool:
    return authenticate_user(username, password) is not None


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "iat": datetime.utcnow()})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify JWT token"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentUser:
    payload = decode_access_token(credentials.credentials)

    if payload is None or payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        role = UserRole(payload.get("role", UserRole.STAFF.value))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentUser(username=payload["sub"], role=role)


def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if current_user.role != UserRole.ADMIN:
        logger.warning(f"Non-admin user attempted admin action: {current_user.username}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required"
        )
    return current_user
