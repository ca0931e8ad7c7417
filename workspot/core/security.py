import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, or_, select

from workspot import config
from workspot.database import get_session
from workspot.models.business import Business
from workspot.models.user import User

logger = logging.getLogger(__name__)


# =========================
# IDENTITY PROVIDER TOKEN
# =========================

# Tokens are issued by the external identity provider; this API only verifies them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def decode_identity_token(token: str) -> dict:
    options = {"verify_aud": config.AUTH_JWT_AUDIENCE is not None}
    return jwt.decode(
        token,
        config.AUTH_JWT_SECRET,
        algorithms=[config.AUTH_JWT_ALGORITHM],
        audience=config.AUTH_JWT_AUDIENCE,
        issuer=config.AUTH_JWT_ISSUER,
        options=options,
    )


# =========================
# USER SYNC
# =========================

def sync_user(session: Session, claims: dict) -> User:
    """Create or refresh the local user record for the token's identity.

    Looked up by provider subject first, so an email change keeps the same
    row, then by email, so a user re-registered at the provider keeps their
    history.
    """
    external_id = claims["sub"]
    email = claims["email"].lower()
    name = (claims.get("name") or "").strip() or None
    avatar_url = claims.get("picture") or None

    user = session.exec(select(User).where(User.external_id == external_id)).first()
    if user is None:
        user = session.exec(select(User).where(User.email == email)).first()

    if user is None:
        user = User(external_id=external_id, email=email, name=name, avatar_url=avatar_url)
        logger.info("Registered user %s", email)
    elif (user.external_id, user.email, user.name, user.avatar_url) == (external_id, email, name, avatar_url):
        return user
    else:
        user.external_id = external_id
        user.email = email
        user.name = name
        user.avatar_url = avatar_url

    try:
        session.add(user)
        session.commit()
    except IntegrityError:
        # a concurrent request synced the same identity first
        session.rollback()
        existing = session.exec(
            select(User).where(or_(User.external_id == external_id, User.email == email))
        ).first()
        if existing is None:
            raise
        logger.warning("User sync for %s lost a race, using the stored record", email)
        return existing

    session.refresh(user)
    return user


# =========================
# AUTHENTICATED USER
# =========================

def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> User:

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    try:
        claims = decode_identity_token(token)
    except JWTError:
        raise credentials_exception

    if not claims.get("sub") or not claims.get("email"):
        raise credentials_exception

    return sync_user(session, claims)


# =========================
# BUSINESS OWNER
# =========================

def get_current_business(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> Business:

    business = session.exec(
        select(Business).where(Business.owner_id == current_user.id)
    ).first()

    if business is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="You have not listed a business yet",
        )

    return business
