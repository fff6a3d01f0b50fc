from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import logging

from fastapi import APIRouter, HTTPException, Depends, Request, Response
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..settings import settings
from ..db import get_db
from ..models import Game, Referee, Simulation, User

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)
logging.getLogger('passlib').setLevel(logging.ERROR)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


class Token(BaseModel):
	access_token: str
	token_type: str = "bearer"


class LoginRequest(BaseModel):
	email: str
	password: str


class SessionUser(BaseModel):
	user_id: int
	name: str
	email: str
	is_admin: bool = False


def hash_sha256(value: str) -> str:
	# Tutor passwords are stored by the simulator as unsalted SHA-256 hex digests.
	return hashlib.sha256(value.encode("utf-8")).hexdigest()


def verify_admin_password(password: str) -> bool:
	hashed = settings.admin_password_hash
	if not hashed:
		return False
	try:
		return pwd_context.verify(password, hashed)
	except ValueError:
		logger.error("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
		return False


def authenticate_user(db: Session, email: str, password: str) -> Optional[SessionUser]:
	normalized = email.strip().lower()
	if normalized == settings.admin_email.lower():
		if not verify_admin_password(password):
			return None
		return SessionUser(user_id=0, name="Administrador", email=normalized, is_admin=True)
	# Only tutors refereeing at least one hospital game may sign in.
	stmt = (
		select(User)
		.join(Referee, Referee.user_id == User.id)
		.join(Game, Referee.group_id == Game.id)
		.join(Simulation, Game.simulation_id == Simulation.id)
		.where(func.lower(User.email) == normalized, Simulation.name.like(settings.game_name_pattern))
		.limit(1)
	)
	row = db.execute(stmt).scalars().first()
	if row is None or hash_sha256(password) != row.password_hash:
		return None
	return SessionUser(user_id=row.id, name=row.name, email=row.email, is_admin=False)


def _resolve_expiry(expires_delta: Optional[timedelta]) -> datetime:
	delta = expires_delta
	if delta is None:
		minutes = settings.access_token_expire_minutes
		delta = timedelta(minutes=minutes) if minutes > 0 else timedelta(days=7)
	return datetime.now(timezone.utc) + delta


def create_access_token(user: SessionUser, expires_delta: Optional[timedelta] = None) -> str:
	to_encode = {
		"sub": str(user.user_id),
		"name": user.name,
		"email": user.email,
		"admin": user.is_admin,
		"exp": _resolve_expiry(expires_delta),
	}
	return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


@router.post("/login", response_model=Token)
async def login(req: LoginRequest, response: Response, db: Session = Depends(get_db)):
	if not req.email or not req.password:
		raise HTTPException(status_code=400, detail="email and password are required")
	user = authenticate_user(db, req.email, req.password)
	if not user:
		raise HTTPException(status_code=401, detail="Incorrect email or password")
	access_token = create_access_token(user)
	response.set_cookie(
		settings.session_cookie_name,
		access_token,
		httponly=True,
		secure=settings.cookie_secure,
		samesite="lax",
		max_age=settings.access_token_expire_minutes * 60,
		path="/",
	)
	logger.info("user %s signed in (admin=%s)", user.email, user.is_admin)
	return Token(access_token=access_token)


@router.post("/logout")
async def logout(response: Response):
	response.delete_cookie(settings.session_cookie_name, path="/")
	return {"ok": True}


def get_current_user(request: Request, token: Optional[str] = Depends(oauth2_scheme)) -> SessionUser:
	credentials_exception = HTTPException(status_code=401, detail="Could not validate credentials")
	token = token or request.cookies.get(settings.session_cookie_name)
	if not token:
		raise credentials_exception
	try:
		payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
		sub = payload.get("sub")
		if sub is None:
			raise credentials_exception
		return SessionUser(
			user_id=int(sub),
			name=payload.get("name", ""),
			email=payload.get("email", ""),
			is_admin=bool(payload.get("admin", False)),
		)
	except (JWTError, ValueError):
		raise credentials_exception


@router.get("/me", response_model=SessionUser)
async def me(user: SessionUser = Depends(get_current_user)):
	return user
