from app.schemas.auth import CurrentUser, Token, TokenData
from app.schemas.health import HealthCheckResponse, ServicesStatus
from app.schemas.post import PostCreate, PostResponse, PostUpdate, PostUser

__all__ = [
    "CurrentUser",
    "HealthCheckResponse",
    "PostCreate",
    "PostResponse",
    "PostUpdate",
    "PostUser",
    "ServicesStatus",
    "Token",
    "TokenData",
]
