"""Identity context for role-scoped data access.

A ``Principal`` is built once per request from the authenticated user and
handed explicitly to the query builder and report aggregator. Its ``scope``
is one of three variants; ``None`` means the user has no usable role and
every scoped query resolves to nothing.
"""
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class AdminScope:
    role = 'admin'


@dataclass(frozen=True)
class ClientScope:
    client_id: str
    role = 'client'


@dataclass(frozen=True)
class MarketScope:
    market_id: str
    role = 'market'


Scope = Union[AdminScope, ClientScope, MarketScope]


@dataclass(frozen=True)
class Principal:
    user_id: Optional[int]
    scope: Optional[Scope]

    @property
    def role(self) -> Optional[str]:
        return self.scope.role if self.scope is not None else None

    @property
    def is_admin(self) -> bool:
        return isinstance(self.scope, AdminScope)

    @property
    def cache_key(self) -> str:
        """Identifies the visible data set, not the user; equal scopes share cache entries."""
        if isinstance(self.scope, ClientScope):
            return f"client-{self.scope.client_id}"
        if isinstance(self.scope, MarketScope):
            return f"market-{self.scope.market_id}"
        return self.role or 'none'

    def as_dict(self):
        data = {'user_id': self.user_id, 'role': self.role}
        if isinstance(self.scope, ClientScope):
            data['client_id'] = self.scope.client_id
        elif isinstance(self.scope, MarketScope):
            data['market_id'] = self.scope.market_id
        return data


def scope_for(role, client_id=None, market_id=None) -> Optional[Scope]:
    """Map a stored role tag to its scope, or ``None`` if it is incomplete."""
    if role == 'admin':
        return AdminScope()
    if role == 'client' and client_id:
        return ClientScope(client_id=str(client_id))
    if role == 'market' and market_id:
        return MarketScope(market_id=str(market_id))
    return None


def principal_for(user) -> Principal:
    if user is None or not getattr(user, 'is_authenticated', False):
        return Principal(user_id=None, scope=None)
    return Principal(
        user_id=user.pk,
        scope=scope_for(
            getattr(user, 'role', None),
            client_id=getattr(user, 'client_id', None),
            market_id=getattr(user, 'market_id', None),
        ),
    )
