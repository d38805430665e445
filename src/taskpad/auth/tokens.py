"""TokenService -- bearer token 签发与校验

JWT（HMAC）编码用户身份声明 sub + iat + exp。
校验是无状态的：不查询存储，因此已"注销"但未过期的 token 在自然过期前仍然有效。
"""

from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from .config import AuthConfig
from .exceptions import Expired, InvalidToken


class TokenService:
    """签发/校验有时效的签名 token"""

    def __init__(
        self,
        secret: str,
        ttl: timedelta,
        algorithm: str = "HS256",
    ) -> None:
        """
        Args:
            secret: 签名密钥（只读配置）
            ttl: token 有效期
            algorithm: HMAC 签名算法
        """
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm

    @classmethod
    def from_config(cls, config: AuthConfig) -> "TokenService":
        """根据 AuthConfig 创建实例"""
        return cls(
            secret=config.token_secret.get_secret_value(),
            ttl=timedelta(minutes=config.token_ttl_minutes),
            algorithm=config.token_algorithm,
        )

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """签发 token

        Args:
            user_id: 用户 ID
            now: 签发时间（默认当前 UTC 时间）

        Returns:
            编码后的 token 字符串
        """
        issued_at = now or datetime.now(UTC)
        claims = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """校验 token 并返回用户 ID

        Raises:
            Expired: 已过期
            InvalidToken: 签名不匹配、结构损坏或缺少 sub
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as e:
            raise Expired("token expired") from e
        except JWTError as e:
            raise InvalidToken("token rejected") from e

        user_id = claims.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidToken("token has no subject")
        return user_id
