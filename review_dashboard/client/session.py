# client/session.py

from typing import Any, Dict, Optional


class ClientSession:
    """
    Registro de sessão do dashboard (token + usuário).

    Uma instância por usuário do dashboard; é passada ao ApiClient, que a
    atualiza no login e a limpa no logout ou quando a API responde 401.
    Quem hospeda o cliente decide onde persistir ``to_dict()``.
    """

    def __init__(self, token: Optional[str] = None, user: Optional[Dict[str, Any]] = None):
        self.token = token
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def begin(self, token: str, user: Optional[Dict[str, Any]]) -> None:
        self.token = token
        self.user = user

    def logout(self) -> None:
        self.token = None
        self.user = None

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {'Authorization': f"Bearer {self.token}"}

    def to_dict(self) -> Dict[str, Any]:
        return {'token': self.token, 'user': self.user}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ClientSession':
        if not isinstance(data, dict):
            return cls()
        return cls(token=data.get('token'), user=data.get('user'))

    def __repr__(self) -> str:
        email = (self.user or {}).get('email')
        return f"<ClientSession authenticated={self.is_authenticated} email={email!r}>"
