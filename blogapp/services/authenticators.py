"""Identity resolution for the three sign-in paths.

Each authenticator turns a credential proof into a ``User`` or raises a
``BlogError``:

- ``LocalAuthenticator``: username + password
- ``ProviderAuthenticator``: a Google profile already verified by Google
- ``OtpAuthenticator``: phone + one-time code, creating the account on match

``register_local`` creates password accounts; the caller still has to log in.
"""

import logging
import secrets
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import generate_password_hash
from blogapp import db
from blogapp.errors import (
    ValidationError, UniquenessViolation, NotFound, InvalidCredential, UpstreamFailure
)
from blogapp.models import User, PendingChallenge
from blogapp.services.twilio_sms import normalize_phone_number, send_sms

logger = logging.getLogger(__name__)

USERNAME_MAX_LENGTH = 80
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128
OTP_LENGTH = 6


def validate_credentials(username, password):
    """Check the shape of a username/password pair. Returns the stripped username."""
    if not isinstance(username, str) or not username.strip():
        raise ValidationError('Username is required')
    if not isinstance(password, str) or not password:
        raise ValidationError('Password is required')

    username = username.strip()
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f'Username must be less than {USERNAME_MAX_LENGTH} characters')
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f'Password must be at least {PASSWORD_MIN_LENGTH} characters')
    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValidationError(f'Password must be less than {PASSWORD_MAX_LENGTH} characters')
    return username


def save_user(user):
    """Commit a new user, mapping unique-constraint failures to UniquenessViolation."""
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        if 'google_id' in str(e.orig):
            raise UniquenessViolation('Google account already exists') from e
        raise UniquenessViolation('Username already exists') from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to save user: {e}")
        raise UpstreamFailure('User registration failed') from e
    return user


def register_local(username, password):
    """Create a password account."""
    username = validate_credentials(username, password)

    if User.query.filter_by(username=username).first():
        raise UniquenessViolation('Username already exists')

    user = User(username=username)
    user.set_password(password)
    save_user(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user


class Authenticator:
    """Resolves a credential proof to a User."""

    name = None

    def resolve(self, *args, **kwargs):
        raise NotImplementedError


class LocalAuthenticator(Authenticator):
    name = 'local'

    def resolve(self, username, password):
        username = username.strip() if isinstance(username, str) else ''
        if not isinstance(password, str):
            password = ''
        user = User.query.filter_by(username=username).first() if username else None
        if not user:
            raise NotFound('Incorrect username.')
        if not user.check_password(password):
            raise InvalidCredential('Incorrect password.')
        return user


class ProviderAuthenticator(Authenticator):
    """Google sign-in. New Google ids get an account named after the profile,
    or ``google_<id>`` when that name is already taken.
    """

    name = 'google'

    def resolve(self, profile):
        user = User.query.filter_by(google_id=profile.provider_id).first()
        if user:
            return user

        username = profile.display_name
        if User.query.filter_by(username=username).first():
            username = f"google_{profile.provider_id}"

        user = User(username=username, google_id=profile.provider_id)
        save_user(user)
        logger.info(f"Created user {user.id} from Google profile")
        return user


class OtpAuthenticator(Authenticator):
    """Phone-verified registration: ``start`` sends a code, ``resolve`` redeems it."""

    name = 'otp'

    @staticmethod
    def generate_code():
        """Generate a 6-digit OTP code."""
        return ''.join(str(secrets.randbelow(10)) for _ in range(OTP_LENGTH))

    def start(self, phone, username, password):
        normalized = normalize_phone_number(phone)
        if not normalized:
            raise ValidationError('Invalid phone number format')

        username = validate_credentials(username, password)
        if User.query.filter_by(username=username).first():
            raise UniquenessViolation('Username already exists')

        code = self.generate_code()
        challenge = PendingChallenge.query.filter_by(phone=normalized).first()
        if challenge is None:
            challenge = PendingChallenge(phone=normalized)
            db.session.add(challenge)
        challenge.code = code
        challenge.username = username
        challenge.password_hash = generate_password_hash(password)

        try:
            db.session.flush()
            send_sms(normalized, f"Your verification code is {code}")
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to store challenge for {normalized}: {e}")
            raise UpstreamFailure('Failed to start phone verification') from e
        except UpstreamFailure:
            db.session.rollback()
            raise

        logger.info(f"OTP challenge sent to {normalized}")
        return challenge

    def resolve(self, phone, code):
        normalized = normalize_phone_number(phone)
        if not normalized:
            raise ValidationError('Invalid phone number format')

        challenge = PendingChallenge.query.filter_by(phone=normalized).first()
        if not challenge:
            raise NotFound('No pending verification for this phone number')

        if not secrets.compare_digest(challenge.code.encode(), str(code or '').strip().encode()):
            logger.info(f"OTP mismatch for {normalized}")
            raise InvalidCredential('Invalid verification code')

        user = User(
            username=challenge.username,
            password_hash=challenge.password_hash,
            phone=normalized,
            phone_verified=True
        )
        db.session.delete(challenge)
        save_user(user)

        logger.info(f"Phone-verified user {user.id} created for {normalized}")
        return user
