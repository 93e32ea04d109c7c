"""Authentication service - user registration and token issuing."""
import logging
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError

from app.errors import AuthenticationError, ConflictError, NotFoundError
from app.models.user import User, UserCreate
from app.utils.auth import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.users = db["users"]

    def _doc_to_user(self, doc: dict) -> User:
        return User(
            _id=str(doc["_id"]),
            email=doc["email"],
            name=doc["name"],
            is_active=doc.get("is_active", True),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def register_user(self, user_create: UserCreate) -> User:
        """
        Register a new user.

        Args:
            user_create: Email, name and plain text password

        Returns:
            User object (without password)

        Raises:
            ConflictError: If email is already registered
        """
        email = user_create.email.lower()
        if await self.users.find_one({"email": email}):
            raise ConflictError("Email already registered")

        now = datetime.now(timezone.utc)
        user_doc = {
            "email": email,
            "hashed_password": hash_password(user_create.password),
            "name": user_create.name,
            "is_active": True,
            "created_at": now,
            "updated_at": now,
        }

        try:
            result = await self.users.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration
            raise ConflictError("Email already registered") from None
        user_doc["_id"] = result.inserted_id

        logger.info("Registered user %s", user_doc["_id"])
        return self._doc_to_user(user_doc)

    async def login(self, email: str, password: str) -> str:
        """
        Check credentials and return a JWT token.

        Raises:
            AuthenticationError: If credentials are invalid or the account is disabled
        """
        user_doc = await self.users.find_one({"email": email.lower()})
        if not user_doc or not verify_password(password, user_doc["hashed_password"]):
            raise AuthenticationError("Invalid email or password")

        if not user_doc.get("is_active", True):
            raise AuthenticationError("Account is disabled")

        return create_access_token(user_id=str(user_doc["_id"]))

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            NotFoundError: If the ID is malformed or no such user exists
        """
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            raise NotFoundError("User not found") from None

        user_doc = await self.users.find_one({"_id": object_id})
        if not user_doc:
            raise NotFoundError("User not found")

        return self._doc_to_user(user_doc)
