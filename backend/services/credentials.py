# backend/services/credentials.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import ValidationError, DuplicateEmailError, InvalidCredentialsError, NotFoundError
from models.users import User
from utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class CredentialStore:
    """Sign-up and login against the users table.

    Emails are matched exactly (case sensitive). Raw passwords never leave
    this class: only the bcrypt hash is persisted.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str):
        return self.db.query(User).filter(User.email == email).first()

    def signup(self, email: str, password: str) -> User:
        if not email or not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Email and password ({MIN_PASSWORD_LENGTH}+ chars) are required.")

        if self.find_by_email(email):
            logger.warning("Signup rejected: email %s already registered", email)
            raise DuplicateEmailError()

        user = User(email=email, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            self.db.rollback()
            logger.warning("Signup rejected: email %s already registered", email)
            raise DuplicateEmailError()
        self.db.refresh(user)

        logger.info("User created with id %s", user.id)
        return user

    def login(self, email: str, password: str) -> User:
        if not email or not password:
            raise ValidationError("Email and password are required.")

        user = self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login failed for %s", email)
            raise InvalidCredentialsError()

        return user

    def get(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
