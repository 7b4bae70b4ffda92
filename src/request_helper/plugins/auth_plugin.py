# src/request_helper/plugins/auth_plugin.py

from typing import Optional, TYPE_CHECKING

from .plugin import Plugin, PluginPriority

if TYPE_CHECKING:
    from ..core.context import RequestContext


class AuthPlugin(Plugin):
    """Плагин для аутентификации: bearer, api_key или basic."""

    priority = PluginPriority.FIRST

    def __init__(self, auth_type: str = "bearer", token: Optional[str] = None,
                 username: Optional[str] = None, password: Optional[str] = None,
                 header_name: str = "X-API-Key"):
        """
        Args:
            auth_type: Тип аутентификации ('bearer', 'basic', 'api_key')
            token: Токен для Bearer или API Key
            username: Имя пользователя для Basic
            password: Пароль для Basic
            header_name: Заголовок для API Key
        """
        self.auth_type = auth_type.lower()
        if self.auth_type not in ('bearer', 'basic', 'api_key'):
            raise ValueError(f"Unknown auth_type: {auth_type}")
        self.token = token
        self.username = username
        self.password = password
        self.header_name = header_name

    def before_request(self, ctx: 'RequestContext'):
        """Добавляет заголовки аутентификации, не перетирая явно заданные."""
        headers = ctx.req.get('headers')
        if headers is None:
            headers = ctx.req['headers'] = {}

        if self.auth_type == 'bearer' and self.token:
            headers.setdefault('Authorization', f"Bearer {self.token}")

        elif self.auth_type == 'api_key' and self.token:
            headers.setdefault(self.header_name, self.token)

        elif self.auth_type == 'basic' and self.username and self.password:
            # requests собирает Basic заголовок из auth
            ctx.req.setdefault('auth', (self.username, self.password))

        return None

    def update_token(self, token: str):
        """Обновляет токен аутентификации."""
        self.token = token
