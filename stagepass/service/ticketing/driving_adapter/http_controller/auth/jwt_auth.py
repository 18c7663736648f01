"""
Bearer token authentication

Tokens are stateless: the identity is rebuilt from the claims, no DB query.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from stagepass.platform.config.core_setting import settings
from stagepass.platform.exception.exceptions import AuthenticationError
from stagepass.service.ticketing.domain.value_object.identity import Identity


class JwtAuth:
    def __init__(
        self,
        *,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
    ) -> None:
        self.secret = secret or settings.SECRET_KEY.get_secret_value()
        self.algorithm = algorithm or settings.ALGORITHM
        self.token_expire_minutes = expire_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_access_token(self, identity: Identity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(identity.id),
            'iat': now,
            'exp': now + timedelta(minutes=self.token_expire_minutes),
            'user_id': identity.id,
            'username': identity.username,
            'organizer': identity.organizer,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={'require': ['exp', 'iat', 'sub']},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError('Token expired') from e
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    def authenticate(self, credential: Optional[str]) -> Identity:
        if not credential:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(credential)

        user_id = payload.get('user_id')
        username = payload.get('username')
        organizer = payload.get('organizer')
        if (
            not isinstance(user_id, int)
            or isinstance(user_id, bool)
            or not username
            or not isinstance(organizer, bool)
        ):
            raise AuthenticationError('Invalid token')

        return Identity(id=user_id, username=username, organizer=organizer)
